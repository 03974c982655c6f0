"""Re-derive every stored lower-case name from its display name."""
import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from elite_bgs.models import (
    Faction,
    FactionPresence,
    Station,
    StationCommodity,
    StationModule,
    StationService,
    StationShip,
    System,
    SystemFaction,
)

logger = logging.getLogger(__name__)

# (model, display column, lower-case column)
TARGETS = (
    (Faction, "name", "name_lower"),
    (FactionPresence, "system_name", "system_name_lower"),
    (System, "name", "name_lower"),
    (SystemFaction, "name", "name_lower"),
    (Station, "name", "name_lower"),
    (Station, "system", "system_lower"),
    (StationService, "name", "name_lower"),
    (StationShip, "name", "name_lower"),
    (StationCommodity, "name", "name_lower"),
    (StationModule, "name", "name_lower"),
)


async def sync_column(session: AsyncSession, model, source: str, target: str) -> int:
    result = await session.execute(
        select(model.id, getattr(model, source), getattr(model, target))
    )
    fixed = 0
    for row_id, value, current in result.all():
        expected = value.lower() if value is not None else None
        if expected != current:
            await session.execute(
                update(model).where(model.id == row_id).values({target: expected})
            )
            fixed += 1
    return fixed


async def run(sessions: async_sessionmaker[AsyncSession]) -> int:
    total = 0
    async with sessions() as session:
        for model, source, target in TARGETS:
            fixed = await sync_column(session, model, source, target)
            if fixed:
                logger.info(f"Fixed {fixed} {model.__tablename__}.{target} values")
            total += fixed
        await session.commit()
    logger.info(f"sync_name_lower finished, {total} values fixed")
    return total
