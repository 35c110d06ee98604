"""Shared fixtures: in-memory database, API client and session tokens."""

import os
from datetime import datetime, timedelta, timezone

TEST_JWT_SECRET = "test-signing-secret"

# Settings are cached on first use; configure the environment before importing the app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["AUTH_ENABLED"] = "true"
os.environ["AUTH_JWT_KEY"] = TEST_JWT_SECRET
os.environ["AUTH_JWT_ALGORITHM"] = "HS256"
os.environ.pop("AUTH_JWT_ISSUER", None)

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from jose import jwt  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import careerpath.models  # noqa: E402, F401
from careerpath.api.deps import get_db  # noqa: E402
from careerpath.core.database import Base  # noqa: E402
from careerpath.main import app  # noqa: E402
from careerpath.models import Roadmap  # noqa: E402
from careerpath.schemas.roadmap import RoadmapStep  # noqa: E402
from careerpath.services.roadmap_service import dump_steps  # noqa: E402


def make_token(user_id: str, role: str | None = "student", **extra_claims: object) -> str:
    """Sign a session token the way the identity provider would."""
    claims: dict = {
        "sub": user_id,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
        **extra_claims,
    }
    if role is not None:
        claims["metadata"] = {"role": role}
    return jwt.encode(claims, TEST_JWT_SECRET, algorithm="HS256")


def three_steps() -> list[RoadmapStep]:
    return [
        RoadmapStep(title="Learn HTML", bullets=["Understand tags", "Build a page"]),
        RoadmapStep(title="Learn CSS", bullets=["Selectors", "Flexbox"], link="https://web.dev/learn/css"),
        RoadmapStep(title="Learn JavaScript", bullets=["DOM", "Events"]),
    ]


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(session_factory) -> AsyncSession:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncClient:
    """HTTP client against the app, backed by the in-memory database."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Build an Authorization header for a user id and role."""

    def _headers(user_id: str, role: str | None = "student") -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(user_id, role)}"}

    return _headers


@pytest_asyncio.fixture
async def make_roadmap(session_factory):
    """Insert a roadmap directly and return its id."""

    async def _make(
        title: str = "Frontend Basics",
        *,
        created_by: str = "alumni-1",
        likes: int = 0,
        steps: list[RoadmapStep] | str | None = None,
        year: int | None = 2,
    ) -> int:
        raw_steps = steps if isinstance(steps, str) else dump_steps(steps or three_steps())
        async with session_factory() as session:
            roadmap = Roadmap(
                title=title,
                year=year,
                created_by=created_by,
                likes=likes,
                steps=raw_steps,
            )
            session.add(roadmap)
            await session.commit()
            return roadmap.id

    return _make
