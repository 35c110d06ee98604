"""Authentication against the identity provider's session tokens.

The identity provider signs a session JWT for every signed-in user. The token
arrives either as ``Authorization: Bearer <token>`` or in the session cookie.
Its ``sub`` claim is the user id and its metadata carries the role.

Handlers never look the session up themselves: they receive an explicit
:class:`RequestContext` through the ``CurrentContext`` dependency.

Setting ``AUTH_ENABLED=false`` turns verification off and runs every request
as ``DEV_USER_ID`` with the admin role. Use it for local development only.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any

from fastapi import Depends
from jose import JWTError, jwt
from starlette.requests import HTTPConnection

from careerpath.core.config import Settings, get_settings
from careerpath.core.exceptions import AuthenticationError, PermissionDeniedError
from careerpath.core.logging import bind_caller, get_logger

logger = get_logger(__name__)


class Role(str, Enum):
    """User roles known to the platform."""

    ADMIN = "admin"
    STUDENT = "student"
    ALUMNI = "alumni"

    @property
    def dashboard_path(self) -> str:
        return f"/{self.value}/dashboard"

    @classmethod
    def from_claim(cls, value: Any) -> "Role":
        """Resolve a role claim; users without one default to student."""
        if value is None or value == "":
            return cls.STUDENT
        try:
            return cls(value)
        except ValueError:
            raise PermissionDeniedError(f"Forbidden: Unknown role '{value}'") from None


@dataclass(frozen=True)
class RequestContext:
    """Verified identity of the caller."""

    user_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def has_role(self, *roles: Role) -> bool:
        return self.role in roles


def extract_session_token(conn: HTTPConnection, settings: Settings) -> str | None:
    """Return the raw session token from the Authorization header or cookie."""
    header = conn.headers.get("Authorization")
    if header:
        scheme, _, token = header.partition(" ")
        if scheme.lower() == "bearer" and token.strip():
            return token.strip()
    return conn.cookies.get(settings.AUTH_SESSION_COOKIE) or None


def _role_claim(claims: dict[str, Any]) -> Any:
    for key in ("metadata", "public_metadata", "publicMetadata"):
        metadata = claims.get(key)
        if isinstance(metadata, dict) and metadata.get("role") is not None:
            return metadata["role"]
    return None


def decode_session_token(token: str, settings: Settings) -> RequestContext:
    """Verify a session token and build the caller's context.

    Raises:
        AuthenticationError: Token is missing a subject, expired or badly signed
        PermissionDeniedError: Token carries a role outside :class:`Role`
    """
    if not settings.AUTH_JWT_KEY:
        logger.error("AUTH_JWT_KEY is not configured; rejecting session token")
        raise AuthenticationError("Unauthorized: Authentication is not configured")

    try:
        claims = jwt.decode(
            token,
            settings.AUTH_JWT_KEY,
            algorithms=[settings.AUTH_JWT_ALGORITHM],
            issuer=settings.AUTH_JWT_ISSUER,
            options={"verify_aud": False},
        )
    except JWTError as e:
        logger.info("Rejected session token", reason=str(e))
        raise AuthenticationError("Unauthorized: Invalid session token") from e

    user_id = claims.get("sub")
    if not user_id:
        raise AuthenticationError("Unauthorized: Session token has no subject")

    return RequestContext(user_id=str(user_id), role=Role.from_claim(_role_claim(claims)))


def resolve_context(conn: HTTPConnection, settings: Settings | None = None) -> RequestContext:
    """Authenticate an HTTP connection.

    Raises:
        AuthenticationError: No valid session token was presented
    """
    settings = settings or get_settings()
    if not settings.AUTH_ENABLED:
        return RequestContext(user_id=settings.DEV_USER_ID, role=Role.ADMIN)

    token = extract_session_token(conn, settings)
    if not token:
        raise AuthenticationError("Unauthorized: Authentication required")
    return decode_session_token(token, settings)


async def get_request_context(conn: HTTPConnection) -> RequestContext:
    """FastAPI dependency returning the authenticated caller."""
    ctx = resolve_context(conn)
    bind_caller(ctx.user_id, ctx.role.value)
    return ctx


def require_role(*roles: Role, message: str | None = None):
    """Build a dependency that admits only callers holding one of ``roles``.

    Example:
        @router.post("")
        async def create(ctx: Annotated[RequestContext, Depends(require_role(Role.ALUMNI))]):
            ...
    """
    allowed = ", ".join(r.value for r in roles)

    def dependency(ctx: Annotated[RequestContext, Depends(get_request_context)]) -> RequestContext:
        if not ctx.has_role(*roles):
            raise PermissionDeniedError(message or f"Forbidden: Requires role {allowed}")
        return ctx

    return dependency


CurrentContext = Annotated[RequestContext, Depends(get_request_context)]
