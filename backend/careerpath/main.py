"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from careerpath.api.routes import ai, dashboards, roadmaps, success_stories, users
from careerpath.core.config import get_settings
from careerpath.core.database import close_db, init_db
from careerpath.core.exceptions import CareerPathError
from careerpath.core.logging import configure_logging, get_logger
from careerpath.core.role_gate import RoleGateMiddleware

settings = get_settings()
logger = get_logger(__name__)

GENERIC_ERROR = "Internal server error"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    configure_logging(debug=settings.DEBUG)
    logger.info(
        "Starting CareerPath",
        version=settings.APP_VERSION,
        env=settings.ENV,
        auth_enabled=settings.AUTH_ENABLED,
    )
    if not settings.AUTH_ENABLED:
        logger.warning("Authentication disabled; all requests run as admin", user_id=settings.DEV_USER_ID)
    await init_db()
    yield
    # Shutdown
    logger.info("Shutting down CareerPath")
    await close_db()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Career roadmaps, progress tracking and alumni success stories",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

app.add_middleware(RoleGateMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.is_development else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Error Envelope: every failure is {"error": message}
# ============================================================================


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@app.exception_handler(CareerPathError)
async def handle_app_error(request: Request, exc: CareerPathError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "Request failed",
            path=request.url.path,
            method=request.method,
            error=exc.message,
            exc_info=exc,
        )
        return _error(exc.status_code, GENERIC_ERROR)
    return _error(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query"))
        messages.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return _error(status.HTTP_400_BAD_REQUEST, ", ".join(messages) or "Invalid request")


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(SQLAlchemyError)
async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error", path=request.url.path, method=request.method, exc_info=exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error", path=request.url.path, method=request.method, exc_info=exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)


# Include routers
app.include_router(roadmaps.router, prefix="/api")
app.include_router(success_stories.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(ai.router, prefix="/api")
app.include_router(dashboards.router)  # gated by RoleGateMiddleware


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "env": settings.ENV,
    }


@app.get("/")
async def root() -> dict:
    """Root endpoint."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }
