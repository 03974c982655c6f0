"""Storage access per entity.

Repositories wrap a session factory rather than a session: enrichment fans
out concurrently and every branch needs its own session.
"""
import uuid
from collections.abc import Iterable, Sequence
from typing import Any

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from elite_bgs.config import settings
from elite_bgs.models import (
    Donation,
    Faction,
    FactionHistory,
    Station,
    StationHistory,
    System,
    SystemHistory,
    User,
)
from elite_bgs.query.compiler import FACTION_FIELDS, STATION_FIELDS, SYSTEM_FIELDS, Field, compile_filter
from elite_bgs.query.filters import FilterSpec
from elite_bgs.query.params import escape_like
from elite_bgs.services.history import HistoryWindow
from elite_bgs.services.pagination import Page, paginate
from elite_bgs.utils.concurrency import with_timeout


class EntityRepository:
    model: Any
    fields: dict[str, Field]
    history_model: Any
    history_owner: str

    def __init__(
        self,
        sessions: async_sessionmaker[AsyncSession],
        *,
        page_size: int = settings.RECORDS_PER_PAGE,
        timeout: float = settings.QUERY_TIMEOUT_SECONDS,
    ):
        self._sessions = sessions
        self.page_size = page_size
        self.timeout = timeout

    def _select(self, spec: FilterSpec) -> Select:
        return select(self.model).where(*compile_filter(spec, self.fields))

    async def _all(self, stmt: Select) -> list:
        async with self._sessions() as session:
            result = await with_timeout(session.execute(stmt), self.timeout)
            return list(result.scalars().all())

    async def find_page(self, spec: FilterSpec, page: int) -> Page:
        stmt = self._select(spec).order_by(self.model.name_lower, self.model.id)
        async with self._sessions() as session:
            return await paginate(session, stmt, page, self.page_size, self.timeout)

    async def find_ids(self, spec: FilterSpec) -> list[uuid.UUID]:
        stmt = select(self.model.id).where(*compile_filter(spec, self.fields))
        return await self._all(stmt)

    async def find_by_names(self, names: Iterable[str]) -> dict[str, Any]:
        """Entities keyed by ``name_lower``. Missing names are simply absent."""
        names = sorted(set(names))
        if not names:
            return {}
        found = await self._all(select(self.model).where(self.model.name_lower.in_(names)))
        by_name: dict[str, Any] = {}
        for entity in found:
            by_name.setdefault(entity.name_lower, entity)
        return by_name

    async def history(
        self,
        owner_id: uuid.UUID,
        window: HistoryWindow,
        criteria: Sequence[Any] = (),
    ) -> list:
        """History rows of one entity inside ``window``.

        Time windows are inclusive and returned oldest first; a count window
        returns the most recent ``count`` rows, newest first.
        """
        h = self.history_model
        stmt = select(h).where(getattr(h, self.history_owner) == owner_id, *criteria)
        if window.count is not None:
            stmt = stmt.order_by(h.updated_at.desc()).limit(window.count)
        else:
            stmt = stmt.where(
                h.updated_at >= window.greater, h.updated_at <= window.lesser
            ).order_by(h.updated_at)
        return await self._all(stmt)


class FactionRepository(EntityRepository):
    model = Faction
    fields = FACTION_FIELDS
    history_model = FactionHistory
    history_owner = "faction_id"

    async def history_in_system(self, system_name_lower: str, window: HistoryWindow) -> list:
        """Every faction's history recorded in one system inside a time window."""
        stmt = (
            select(FactionHistory)
            .where(
                FactionHistory.system_lower == system_name_lower,
                FactionHistory.updated_at >= window.greater,
                FactionHistory.updated_at <= window.lesser,
            )
            .order_by(FactionHistory.updated_at, FactionHistory.faction_name_lower)
        )
        return await self._all(stmt)


class SystemRepository(EntityRepository):
    model = System
    fields = SYSTEM_FIELDS
    history_model = SystemHistory
    history_owner = "system_id"


class StationRepository(EntityRepository):
    model = Station
    fields = STATION_FIELDS
    history_model = StationHistory
    history_owner = "station_id"


class UserRepository:
    def __init__(
        self,
        sessions: async_sessionmaker[AsyncSession],
        *,
        page_size: int = settings.RECORDS_PER_PAGE,
        timeout: float = settings.QUERY_TIMEOUT_SECONDS,
    ):
        self._sessions = sessions
        self.page_size = page_size
        self.timeout = timeout

    async def find_page(
        self, user_id: uuid.UUID | None, begins_with: str | None, page: int
    ) -> Page:
        stmt = select(User)
        if user_id is not None:
            stmt = stmt.where(User.id == user_id)
        if begins_with:
            pattern = f"{escape_like(begins_with.lower())}%"
            stmt = stmt.where(
                or_(
                    func.lower(User.username).like(pattern, escape="\\"),
                    func.lower(User.discord_id).like(pattern, escape="\\"),
                )
            )
        stmt = stmt.order_by(User.username, User.id)
        async with self._sessions() as session:
            return await paginate(session, stmt, page, self.page_size, self.timeout)

    async def _rows(self, stmt: Select) -> list:
        async with self._sessions() as session:
            result = await with_timeout(session.execute(stmt), self.timeout)
            return list(result.all())

    async def donations(self) -> list:
        """(username, amount, date) per donation, newest first."""
        stmt = (
            select(User.username, Donation.amount, Donation.date)
            .join(Donation, Donation.user_id == User.id)
            .order_by(Donation.date.desc())
        )
        return await self._rows(stmt)

    async def patrons(self) -> list:
        stmt = (
            select(User.username, User.patronage_level, User.patronage_since)
            .where(User.patronage_level > 0)
            .order_by(User.patronage_since.desc())
        )
        return await self._rows(stmt)

    async def credits(self) -> list:
        stmt = (
            select(
                User.username,
                User.avatar,
                User.discord_id,
                User.os_contribution,
                User.patronage_level,
            )
            .where(or_(User.os_contribution > 0, User.patronage_level > 1))
            .order_by(User.patronage_since.desc(), User.username)
        )
        return await self._rows(stmt)
