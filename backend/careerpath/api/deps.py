"""API dependencies."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from careerpath.core.auth import RequestContext, Role, get_request_context, require_role
from careerpath.core.database import get_session


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    async for session in get_session():
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db)]

# Authenticated caller (any role)
CurrentContext = Annotated[RequestContext, Depends(get_request_context)]

StudentContext = Annotated[
    RequestContext,
    Depends(require_role(Role.STUDENT, message="Forbidden: Only students can update roadmap progress")),
]
AlumniContext = Annotated[
    RequestContext,
    Depends(require_role(Role.ALUMNI, message="Forbidden: Only alumni can create roadmaps")),
]
AdminContext = Annotated[
    RequestContext,
    Depends(require_role(Role.ADMIN, message="Forbidden: Admin role required")),
]
AlumniOrAdminContext = Annotated[
    RequestContext,
    Depends(require_role(Role.ALUMNI, Role.ADMIN)),
]
