import asyncio
from collections.abc import Awaitable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

from elite_bgs.exceptions import QueryTimeoutError

T = TypeVar("T")


@dataclass(frozen=True)
class Settled(Generic[T]):
    """Outcome of one concurrent branch: either a value or the error it raised."""

    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _settled(result) -> Settled:
    if isinstance(result, Exception):
        return Settled(error=result)
    if isinstance(result, BaseException):
        # Cancellation and interpreter exits are not branch failures.
        raise result
    return Settled(value=result)


async def settle_all(awaitables: Iterable[Awaitable[T]]) -> list[Settled[T]]:
    """Await every awaitable concurrently; one failure never cancels the others."""
    results = await asyncio.gather(*awaitables, return_exceptions=True)
    return [_settled(result) for result in results]


async def settle(**branches: Awaitable[T]) -> dict[str, Settled[T]]:
    """Named form of ``settle_all``."""
    outcomes = await settle_all(branches.values())
    return dict(zip(branches, outcomes))


async def with_timeout(awaitable: Awaitable[T], seconds: float, what: str = "Query") -> T:
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except asyncio.TimeoutError as exc:
        raise QueryTimeoutError(f"{what} exceeded {seconds:g}s") from exc
