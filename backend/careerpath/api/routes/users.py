"""Identity provider user administration routes (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from careerpath.api.deps import AdminContext
from careerpath.core.config import get_settings
from careerpath.schemas.user import UserCreate, UserListResponse, UserResponse
from careerpath.services.identity_service import IdentityClient, get_identity_client

router = APIRouter(prefix="/users", tags=["users"])

IdentityDep = Annotated[IdentityClient, Depends(get_identity_client)]


@router.get("", response_model=UserListResponse)
async def list_users(ctx: AdminContext, client: IdentityDep) -> dict:
    """List users registered with the identity provider."""
    users = await client.list_users(limit=get_settings().IDENTITY_USERS_PAGE_SIZE)
    return {"users": users}


@router.post("", response_model=UserResponse)
async def create_user(data: UserCreate, ctx: AdminContext, client: IdentityDep) -> UserResponse:
    """Create a user with a role at the identity provider."""
    return await client.create_user(data)
