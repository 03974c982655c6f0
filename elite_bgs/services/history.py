"""History window resolution and per-entity history attachment."""
import logging
import uuid
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from elite_bgs.config import settings
from elite_bgs.exceptions import UsageError
from elite_bgs.utils.concurrency import settle_all
from elite_bgs.utils.rows import column_values

logger = logging.getLogger(__name__)

# Fields every history row repeats from its owner.
REDUNDANT_FIELDS = {
    "faction": ("faction_id", "faction_name", "faction_name_lower"),
    "system": ("system_id", "system_name", "system_name_lower"),
    "station": ("station_id", "station_name", "station_name_lower"),
}


def from_epoch_ms(value: int) -> datetime:
    try:
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as exc:
        raise UsageError(f"Time bound {value} is out of range") from exc


@dataclass(frozen=True)
class HistoryWindow:
    """Either an inclusive time range or the ``count`` most recent records."""

    greater: datetime | None = None
    lesser: datetime | None = None
    count: int | None = None

    @classmethod
    def from_params(
        cls,
        timemin: int | None,
        timemax: int | None,
        count: int | None = None,
        span_ms: int = settings.HISTORY_WINDOW_MS,
    ) -> "HistoryWindow | None":
        """Resolve request bounds; ``None`` when no history was asked for.

        ``count`` takes precedence over the time bounds. A single time bound
        is widened into a window of ``span_ms`` on the open side.
        """
        if count is not None:
            return cls(count=count)
        if timemin is not None and timemax is not None:
            return cls(greater=from_epoch_ms(timemin), lesser=from_epoch_ms(timemax))
        if timemin is not None:
            return cls(greater=from_epoch_ms(timemin), lesser=from_epoch_ms(timemin + span_ms))
        if timemax is not None:
            return cls(greater=from_epoch_ms(timemax - span_ms), lesser=from_epoch_ms(timemax))
        return None

    @property
    def is_count(self) -> bool:
        return self.count is not None


def strip_history(row: Any, kind: str) -> dict[str, Any]:
    """Column values of a history row without the owner's identifying fields."""
    return column_values(row, exclude=REDUNDANT_FIELDS[kind])


@dataclass(frozen=True)
class HistoryOutcome:
    records: list[dict[str, Any]] | None = None
    error: str | None = None


async def join_history(
    owner_ids: Sequence[uuid.UUID],
    fetch: Callable[[uuid.UUID], Awaitable[list]],
    kind: str,
) -> dict[uuid.UUID, HistoryOutcome]:
    """Fetch history for every owner concurrently.

    An owner whose fetch fails gets an outcome carrying the error message;
    the other owners are unaffected.
    """
    outcomes = await settle_all(fetch(owner_id) for owner_id in owner_ids)
    joined: dict[uuid.UUID, HistoryOutcome] = {}
    for owner_id, outcome in zip(owner_ids, outcomes):
        if outcome.ok:
            joined[owner_id] = HistoryOutcome(
                records=[strip_history(row, kind) for row in outcome.value]
            )
        else:
            logger.warning(f"History for {kind} {owner_id} failed: {outcome.error!r}")
            joined[owner_id] = HistoryOutcome(error=f"History unavailable: {outcome.error}")
    return joined
