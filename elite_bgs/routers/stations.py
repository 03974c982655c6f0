from fastapi import APIRouter, Depends

from elite_bgs.dependencies import (
    Caller,
    get_current_user,
    get_faction_repository,
    get_station_repository,
    get_system_repository,
)
from elite_bgs.query.params import HistoryParams, StationParams
from elite_bgs.repositories import FactionRepository, StationRepository, SystemRepository
from elite_bgs.schemas import Paginated, StationView
from elite_bgs.services.stations import search_stations

router = APIRouter(prefix="/api/stations", tags=["stations"])


@router.get("", response_model=Paginated[StationView])
async def list_stations(
    params: StationParams = Depends(),
    history: HistoryParams = Depends(),
    caller: Caller = Depends(get_current_user),
    stations: StationRepository = Depends(get_station_repository),
    factions: FactionRepository = Depends(get_faction_repository),
    systems: SystemRepository = Depends(get_system_repository),
):
    """Search stations, optionally with history and system details."""
    return await search_stations(
        params,
        history,
        is_admin=caller.is_admin,
        stations=stations,
        factions=factions,
        systems=systems,
    )
