"""Identity provider backend API client (user administration)."""

from typing import Any

import httpx

from careerpath.core.auth import Role
from careerpath.core.config import get_settings
from careerpath.core.exceptions import UpstreamServiceError
from careerpath.core.logging import get_logger
from careerpath.schemas.user import UserCreate, UserResponse

logger = get_logger(__name__)


def _primary_email(user: dict[str, Any]) -> str:
    primary_id = user.get("primary_email_address_id")
    for address in user.get("email_addresses") or []:
        if address.get("id") == primary_id:
            return address.get("email_address") or ""
    return ""


def _user_role(user: dict[str, Any]) -> Role:
    raw = (user.get("public_metadata") or {}).get("role")
    try:
        return Role(raw) if raw else Role.STUDENT
    except ValueError:
        logger.warning("User has unknown role, reporting as student", user_id=user.get("id"), role=raw)
        return Role.STUDENT


def to_user_response(user: dict[str, Any]) -> UserResponse:
    """Map a provider user object onto the API representation."""
    first = user.get("first_name")
    last = user.get("last_name")
    full_name = f"{first} {last}" if first and last else first or last or None
    return UserResponse(
        id=user["id"],
        email=_primary_email(user),
        first_name=first,
        last_name=last,
        full_name=full_name,
        role=_user_role(user),
        created_at=user.get("created_at") or 0,
    )


class IdentityClient:
    """Thin async client over the provider's ``/users`` endpoints."""

    def __init__(
        self,
        base_url: str,
        secret_key: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._secret_key = secret_key
        self._transport = transport

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        async with httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Authorization": f"Bearer {self._secret_key}"},
            transport=self._transport,
        ) as client:
            try:
                response = await client.request(method, path, **kwargs)
            except httpx.HTTPError as e:
                logger.error("Identity provider unreachable", method=method, path=path, error=str(e))
                raise UpstreamServiceError("Identity provider request failed") from e

        if response.status_code == 422:
            try:
                payload = response.json()
            except ValueError:
                payload = {}
            errors = (payload.get("errors") if isinstance(payload, dict) else None) or []
            detail = ", ".join(err.get("message", "") for err in errors) or "Unprocessable request"
            logger.info("Identity provider rejected request", path=path, detail=detail)
            raise UpstreamServiceError(f"Failed to create user: {detail}", status_code=422)

        if response.is_error:
            logger.error(
                "Identity provider error",
                method=method,
                path=path,
                status=response.status_code,
                body=response.text[:200],
            )
            raise UpstreamServiceError("Identity provider request failed")

        try:
            return response.json()
        except ValueError as e:
            logger.error(
                "Identity provider returned invalid JSON",
                method=method,
                path=path,
                body=response.text[:200],
            )
            raise UpstreamServiceError("Identity provider request failed") from e

    async def list_users(self, limit: int) -> list[UserResponse]:
        payload = await self._request("GET", "/users", params={"limit": limit})
        users = payload.get("data", []) if isinstance(payload, dict) else payload
        return [to_user_response(u) for u in users]

    async def create_user(self, data: UserCreate) -> UserResponse:
        body: dict[str, Any] = {
            "first_name": data.first_name,
            "email_address": [data.email],
            "password": data.password,
            "public_metadata": {"role": data.role.value},
        }
        if data.last_name:
            body["last_name"] = data.last_name

        user = await self._request("POST", "/users", json=body)
        logger.info("Identity user created", user_id=user.get("id"), role=data.role.value)
        return to_user_response(user)


def get_identity_client() -> IdentityClient:
    """FastAPI dependency returning a configured identity client."""
    settings = get_settings()
    if not settings.IDENTITY_SECRET_KEY:
        logger.error("IDENTITY_SECRET_KEY is not configured")
        raise UpstreamServiceError("Identity provider is not configured")
    return IdentityClient(settings.IDENTITY_API_URL, settings.IDENTITY_SECRET_KEY)
