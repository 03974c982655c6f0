"""User profiles and the community views derived from them."""
import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from elite_bgs.exceptions import NotFoundError, PermissionDeniedError
from elite_bgs.models import User
from elite_bgs.repositories import UserRepository
from elite_bgs.schemas import CreditEntry, DonorEntry, Paginated, PatronEntry, UserResponse, UserUpdate

logger = logging.getLogger(__name__)


def validate_user(update: UserUpdate) -> bool:
    """Every named faction or system must carry its own lower-cased name."""
    entries = [*(update.factions or ()), *(update.systems or ())]
    return all(entry.name_lower == entry.name.lower() for entry in entries)


async def list_users(
    users: UserRepository,
    *,
    user_id: uuid.UUID | None,
    begins_with: str | None,
    page: int,
) -> Paginated[UserResponse]:
    result = await users.find_page(user_id, begins_with, page)
    return Paginated[UserResponse](
        docs=[UserResponse.model_validate(user) for user in result.docs],
        total=result.total,
        pages=result.pages,
        page=result.page,
        limit=result.limit,
    )


async def update_user(
    db: AsyncSession, update: UserUpdate, *, caller_id: uuid.UUID | None, is_admin: bool
) -> bool:
    """Apply a profile update.

    Only fields present in the body are touched; a field sent as ``null`` is
    cleared. Only admins may change another user or anyone's access level.
    Returns False when the named entries do not validate.
    """
    if not is_admin and caller_id != update.id:
        raise PermissionDeniedError("Only admins may update other users")
    if not validate_user(update):
        logger.info(f"Rejected update for user {update.id}: inconsistent name_lower")
        return False

    user = await db.scalar(select(User).where(User.id == update.id))
    if user is None:
        raise NotFoundError(f"User {update.id} not found")
    if not is_admin and update.access != user.access:
        raise PermissionDeniedError("Only admins may change access levels")

    # Explicit nulls are part of the set fields and clear the column.
    changes = update.model_dump(exclude={"id"}, exclude_unset=True)
    for key, value in changes.items():
        setattr(user, key, value)
    await db.flush()
    return True


async def donors(users: UserRepository) -> list[DonorEntry]:
    return [
        DonorEntry(username=username, amount=amount, date=date)
        for username, amount, date in await users.donations()
    ]


async def patrons(users: UserRepository) -> list[PatronEntry]:
    return [
        PatronEntry(username=username, level=level, since=since)
        for username, level, since in await users.patrons()
    ]


async def credits(users: UserRepository) -> list[CreditEntry]:
    return [
        CreditEntry(
            username=username,
            avatar=avatar,
            discord_id=discord_id,
            os_contribution=os_contribution,
            level=level,
        )
        for username, avatar, discord_id, os_contribution, level in await users.credits()
    ]
