from fastapi import APIRouter, Depends

from elite_bgs.dependencies import (
    Caller,
    get_current_user,
    get_faction_repository,
    get_system_repository,
)
from elite_bgs.query.params import HistoryParams, SystemParams
from elite_bgs.repositories import FactionRepository, SystemRepository
from elite_bgs.schemas import Paginated, SystemView
from elite_bgs.services.systems import search_systems

router = APIRouter(prefix="/api/systems", tags=["systems"])


@router.get("", response_model=Paginated[SystemView])
async def list_systems(
    params: SystemParams = Depends(),
    history: HistoryParams = Depends(),
    caller: Caller = Depends(get_current_user),
    systems: SystemRepository = Depends(get_system_repository),
    factions: FactionRepository = Depends(get_faction_repository),
):
    """Search systems, optionally with history and faction details."""
    return await search_systems(
        params, history, is_admin=caller.is_admin, systems=systems, factions=factions
    )
