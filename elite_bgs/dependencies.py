"""Request-scoped dependencies: the calling user and the repositories."""
import uuid
from dataclasses import dataclass

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from elite_bgs.config import settings
from elite_bgs.database import get_session_factory
from elite_bgs.exceptions import PermissionDeniedError
from elite_bgs.repositories import (
    FactionRepository,
    StationRepository,
    SystemRepository,
    UserRepository,
)

ADMIN_ACCESS = 0


@dataclass(frozen=True)
class Caller:
    id: uuid.UUID | None = None
    access: int | None = None

    @property
    def is_admin(self) -> bool:
        return self.access == ADMIN_ACCESS


def get_current_user(request: Request) -> Caller:
    """The caller authenticated upstream, anonymous when there is none.

    The authentication middleware stores the user on ``request.state.user``
    with ``id`` and ``access`` attributes.
    """
    user = getattr(request.state, "user", None)
    if user is None:
        return Caller()
    user_id = getattr(user, "id", None)
    if user_id is not None and not isinstance(user_id, uuid.UUID):
        user_id = uuid.UUID(str(user_id))
    return Caller(id=user_id, access=getattr(user, "access", None))


def require_admin(caller: Caller = Depends(get_current_user)) -> Caller:
    if not caller.is_admin:
        raise PermissionDeniedError("Admin access required")
    return caller


def _repository_options() -> dict:
    return {"page_size": settings.RECORDS_PER_PAGE, "timeout": settings.QUERY_TIMEOUT_SECONDS}


def get_faction_repository(
    sessions: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> FactionRepository:
    return FactionRepository(sessions, **_repository_options())


def get_system_repository(
    sessions: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> SystemRepository:
    return SystemRepository(sessions, **_repository_options())


def get_station_repository(
    sessions: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> StationRepository:
    return StationRepository(sessions, **_repository_options())


def get_user_repository(
    sessions: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> UserRepository:
    return UserRepository(sessions, **_repository_options())
