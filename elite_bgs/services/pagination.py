import math
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from elite_bgs.utils.concurrency import with_timeout

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    docs: list[T]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def count_statement(stmt: Select) -> Select:
    return select(func.count()).select_from(stmt.order_by(None).subquery())


async def paginate(
    session: AsyncSession,
    stmt: Select,
    page: int,
    limit: int,
    timeout: float,
    count_stmt: Select | None = None,
) -> Page[Any]:
    """Run ``stmt`` for one 1-indexed page plus a count of all matches.

    ``count_stmt`` replaces the derived count query when counting the full
    statement would repeat expensive work.
    """
    page = max(page, 1)
    if count_stmt is None:
        count_stmt = count_statement(stmt)

    total = await with_timeout(session.scalar(count_stmt), timeout, "Count query")
    result = await with_timeout(
        session.execute(stmt.offset((page - 1) * limit).limit(limit)),
        timeout,
        "Page query",
    )
    return Page(docs=list(result.scalars().all()), total=total or 0, page=page, limit=limit)
