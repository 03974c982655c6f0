from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from elite_bgs.database import get_db
from elite_bgs.dependencies import Caller, get_current_user, get_user_repository, require_admin
from elite_bgs.repositories import UserRepository
from elite_bgs.schemas import Paginated, UserResponse, UserUpdate
from elite_bgs.services.users import list_users, update_user

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=Paginated[UserResponse])
async def get_users(
    id: UUID | None = Query(default=None),
    begins_with: str | None = Query(default=None, alias="beginsWith"),
    page: int = Query(default=1),
    _: Caller = Depends(require_admin),
    users: UserRepository = Depends(get_user_repository),
):
    """List users (admins only)."""
    return await list_users(users, user_id=id, begins_with=begins_with, page=page)


@router.put("", response_model=bool)
async def put_user(
    data: UserUpdate,
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update a user profile. Fields sent as null are cleared."""
    return await update_user(db, data, caller_id=caller.id, is_admin=caller.is_admin)
