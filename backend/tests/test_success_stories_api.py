"""HTTP tests for /api/success-stories."""

import re
from datetime import datetime

import pytest
from httpx import AsyncClient


def _story(**overrides) -> dict:
    story = {
        "name": "Ayesha Khan",
        "post": "Software Engineer at Acme",
        "batch": 2021,
        "followed_roadmap": "Web Development",
        "connect_link": "mailto:ayesha@example.com",
        "image_url": "https://cdn.example.com/ayesha.png",
    }
    story.update(overrides)
    return story


@pytest.mark.asyncio
async def test_create_and_list_stories(client: AsyncClient, auth_headers) -> None:
    headers = auth_headers("alumni-1", "alumni")

    resp = await client.post("/api/success-stories", json=_story(), headers=headers)
    assert resp.status_code == 201
    created = resp.json()
    assert created["name"] == "Ayesha Khan"
    assert created["connect_link"] == "mailto:ayesha@example.com"
    assert re.fullmatch(r"\d{2}/\d{2}/\d{4}", created["created_at"])

    await client.post("/api/success-stories", json=_story(name="Bilal", image_url=""), headers=headers)

    resp = await client.get("/api/success-stories")
    assert resp.status_code == 200
    stories = resp.json()
    assert [s["name"] for s in stories] == ["Bilal", "Ayesha Khan"]
    assert stories[0]["image_url"] is None


@pytest.mark.asyncio
async def test_create_story_requires_authentication(client: AsyncClient) -> None:
    resp = await client.post("/api/success-stories", json=_story())
    assert resp.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"connect_link": "https://linkedin.com/in/ayesha"}, "Connect link must be a valid mailto: link"),
        ({"batch": 1899}, "Invalid batch year"),
        ({"batch": datetime.now().year + 1}, "Invalid batch year"),
        ({"name": "   "}, "Missing or empty required field"),
        ({"post": ""}, "Missing or empty required field"),
        ({"likes": 10}, "Extra inputs are not permitted"),
    ],
)
async def test_create_story_validation(client: AsyncClient, auth_headers, overrides: dict, message: str) -> None:
    resp = await client.post(
        "/api/success-stories", json=_story(**overrides), headers=auth_headers("alumni-1", "alumni")
    )
    assert resp.status_code == 400
    assert message in resp.json()["error"]


@pytest.mark.asyncio
async def test_create_story_missing_field(client: AsyncClient, auth_headers) -> None:
    payload = _story()
    del payload["followed_roadmap"]
    resp = await client.post("/api/success-stories", json=payload, headers=auth_headers("alumni-1", "alumni"))
    assert resp.status_code == 400
    assert "followed_roadmap" in resp.json()["error"]


@pytest.mark.asyncio
async def test_delete_story(client: AsyncClient, auth_headers) -> None:
    headers = auth_headers("admin-1", "admin")
    created = (await client.post("/api/success-stories", json=_story(), headers=headers)).json()

    resp = await client.request("DELETE", "/api/success-stories", json={"id": created["id"]}, headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Success story deleted successfully"}

    resp = await client.request("DELETE", "/api/success-stories", json={"id": created["id"]}, headers=headers)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Success story not found"}


@pytest.mark.asyncio
async def test_delete_story_rejects_bad_id(client: AsyncClient, auth_headers) -> None:
    headers = auth_headers("admin-1", "admin")
    resp = await client.request("DELETE", "/api/success-stories", json={"id": 0}, headers=headers)
    assert resp.status_code == 400

    resp = await client.request("DELETE", "/api/success-stories", json={}, headers=headers)
    assert resp.status_code == 400
