"""Tests for session token verification and role gating."""

import pytest
from httpx import AsyncClient
from starlette.requests import Request

from careerpath.core.auth import RequestContext, Role, decode_session_token, resolve_context
from careerpath.core.config import Settings
from careerpath.core.exceptions import AuthenticationError, PermissionDeniedError
from careerpath.core.role_gate import gated_role
from conftest import TEST_JWT_SECRET, make_token


def _settings(**overrides) -> Settings:
    values = {"AUTH_ENABLED": True, "AUTH_JWT_KEY": TEST_JWT_SECRET, "AUTH_JWT_ALGORITHM": "HS256"}
    values.update(overrides)
    return Settings(**values)


def _request(headers: dict[str, str] | None = None) -> Request:
    raw = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw})


class TestDecodeSessionToken:
    def test_valid_token(self):
        ctx = decode_session_token(make_token("user-1", "alumni"), _settings())
        assert ctx == RequestContext(user_id="user-1", role=Role.ALUMNI)

    def test_missing_role_defaults_to_student(self):
        ctx = decode_session_token(make_token("user-1", role=None), _settings())
        assert ctx.role is Role.STUDENT

    def test_public_metadata_claim(self):
        token = make_token("user-1", role=None, public_metadata={"role": "admin"})
        assert decode_session_token(token, _settings()).is_admin

    def test_unknown_role_is_forbidden(self):
        with pytest.raises(PermissionDeniedError):
            decode_session_token(make_token("user-1", "mentor"), _settings())

    def test_bad_signature(self):
        with pytest.raises(AuthenticationError):
            decode_session_token(make_token("user-1"), _settings(AUTH_JWT_KEY="another-secret"))

    def test_garbage_token(self):
        with pytest.raises(AuthenticationError):
            decode_session_token("not-a-jwt", _settings())

    def test_issuer_mismatch(self):
        token = make_token("user-1", iss="https://evil.example.com")
        with pytest.raises(AuthenticationError):
            decode_session_token(token, _settings(AUTH_JWT_ISSUER="https://clerk.example.com"))

    def test_missing_key_rejects(self):
        with pytest.raises(AuthenticationError):
            decode_session_token(make_token("user-1"), _settings(AUTH_JWT_KEY=None))


class TestResolveContext:
    def test_bearer_header(self):
        request = _request({"Authorization": f"Bearer {make_token('user-1', 'student')}"})
        assert resolve_context(request, _settings()).user_id == "user-1"

    def test_session_cookie(self):
        request = _request({"Cookie": f"__session={make_token('user-2', 'alumni')}"})
        ctx = resolve_context(request, _settings())
        assert ctx == RequestContext(user_id="user-2", role=Role.ALUMNI)

    def test_no_token(self):
        with pytest.raises(AuthenticationError):
            resolve_context(_request(), _settings())

    def test_auth_disabled_runs_as_dev_admin(self):
        ctx = resolve_context(_request(), _settings(AUTH_ENABLED=False, DEV_USER_ID="dev"))
        assert ctx == RequestContext(user_id="dev", role=Role.ADMIN)


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/admin/dashboard", Role.ADMIN),
        ("/student", Role.STUDENT),
        ("/alumni/roadmaps/3", Role.ALUMNI),
        ("/api/roadmaps", None),
        ("/administrator", None),
        ("/", None),
    ],
)
def test_gated_role(path, expected):
    assert gated_role(path) is expected


@pytest.mark.asyncio
async def test_gate_redirects_anonymous_to_sign_in(client: AsyncClient) -> None:
    resp = await client.get("/alumni/dashboard")
    assert resp.status_code == 307
    assert resp.headers["location"] == "/sign-in?redirect_url=/alumni/dashboard"


@pytest.mark.asyncio
async def test_gate_redirects_wrong_role_to_own_dashboard(client: AsyncClient, auth_headers) -> None:
    resp = await client.get("/admin/dashboard", headers=auth_headers("student-1", "student"))
    assert resp.status_code == 307
    assert resp.headers["location"] == "/student/dashboard"


@pytest.mark.asyncio
async def test_gate_rejects_unknown_role(client: AsyncClient, auth_headers) -> None:
    resp = await client.get("/student/dashboard", headers=auth_headers("user-1", "mentor"))
    assert resp.status_code == 403
    assert resp.json() == {"error": "Forbidden: Unknown role 'mentor'"}


@pytest.mark.asyncio
async def test_gate_lets_matching_role_through(client: AsyncClient, auth_headers, make_roadmap) -> None:
    rid = await make_roadmap()
    await client.put(
        "/api/roadmaps",
        json={"userId": "student-1", "roadmapId": rid, "liked": True, "completed_steps": [0, 1, 2]},
        headers=auth_headers("student-1", "student"),
    )

    resp = await client.get("/student/dashboard", headers=auth_headers("student-1", "student"))
    assert resp.status_code == 200
    assert resp.json()["summary"] == {"liked": 1, "started": 1, "completed": 1}


@pytest.mark.asyncio
async def test_alumni_and_admin_dashboards(client: AsyncClient, auth_headers, make_roadmap) -> None:
    await make_roadmap(created_by="alumni-1", likes=4)
    await make_roadmap(created_by="alumni-2", likes=1)

    resp = await client.get("/alumni/dashboard", headers=auth_headers("alumni-1", "alumni"))
    assert resp.status_code == 200
    assert resp.json()["summary"] == {"roadmaps": 1, "likes": 4}

    resp = await client.get("/admin/dashboard", headers=auth_headers("admin-1", "admin"))
    assert resp.status_code == 200
    assert resp.json()["summary"] == {"roadmaps": 2, "success_stories": 0, "progress_records": 0}


@pytest.mark.asyncio
async def test_api_routes_are_not_redirected(client: AsyncClient) -> None:
    resp = await client.get("/api/roadmaps")
    assert resp.status_code == 200
    assert resp.json() == {"data": []}


@pytest.mark.asyncio
async def test_student_dashboard_ignores_out_of_range_steps(
    client: AsyncClient, auth_headers, make_roadmap
) -> None:
    rid = await make_roadmap()
    headers = auth_headers("student-1", "student")
    await client.put(
        "/api/roadmaps",
        json={"userId": "student-1", "roadmapId": rid, "completed_steps": [7, 8, 9]},
        headers=headers,
    )

    resp = await client.get("/student/dashboard", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["summary"] == {"liked": 0, "started": 1, "completed": 0}
