from fastapi import APIRouter, Depends

from elite_bgs.dependencies import (
    Caller,
    get_current_user,
    get_faction_repository,
    get_system_repository,
)
from elite_bgs.query.params import FactionParams, HistoryParams
from elite_bgs.repositories import FactionRepository, SystemRepository
from elite_bgs.schemas import FactionView, Paginated
from elite_bgs.services.factions import search_factions

router = APIRouter(prefix="/api/factions", tags=["factions"])


@router.get("", response_model=Paginated[FactionView])
async def list_factions(
    params: FactionParams = Depends(),
    history: HistoryParams = Depends(),
    caller: Caller = Depends(get_current_user),
    factions: FactionRepository = Depends(get_faction_repository),
    systems: SystemRepository = Depends(get_system_repository),
):
    """Search factions, optionally with history and system details."""
    return await search_factions(
        params, history, is_admin=caller.is_admin, factions=factions, systems=systems
    )
