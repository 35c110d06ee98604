"""Role gating for the role-prefixed page routes (/admin, /student, /alumni)."""

from urllib.parse import quote

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse, Response

from careerpath.core.auth import Role, resolve_context
from careerpath.core.config import get_settings
from careerpath.core.exceptions import AuthenticationError, PermissionDeniedError
from careerpath.core.logging import bind_request, get_logger

logger = get_logger(__name__)


def gated_role(path: str) -> Role | None:
    """Return the role a path prefix requires, if any."""
    segment = path.lstrip("/").split("/", 1)[0]
    try:
        return Role(segment)
    except ValueError:
        return None


class RoleGateMiddleware(BaseHTTPMiddleware):
    """Redirect callers away from role pages they are not allowed to see.

    - No session: redirect to the sign-in page, remembering the target path.
    - Wrong role: redirect to the caller's own dashboard.

    Every request also starts a fresh log context here.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        bind_request(request.method, request.url.path)
        required = gated_role(request.url.path)
        if required is None:
            return await call_next(request)

        settings = get_settings()
        try:
            ctx = resolve_context(request, settings)
        except AuthenticationError:
            target = f"{settings.SIGN_IN_URL}?redirect_url={quote(request.url.path)}"
            return RedirectResponse(target, status_code=307)
        except PermissionDeniedError as e:
            return JSONResponse({"error": e.message}, status_code=e.status_code)

        if ctx.role is not required:
            logger.info(
                "Role gate redirect",
                path=request.url.path,
                user_id=ctx.user_id,
                role=ctx.role.value,
            )
            return RedirectResponse(ctx.role.dashboard_path, status_code=307)

        return await call_next(request)
