"""Station search: filter, page, attach history, resolve the host system."""
from elite_bgs.models import Station
from elite_bgs.query.builders import build_station_filter, ensure_bounded
from elite_bgs.query.params import HistoryParams, StationParams
from elite_bgs.repositories import FactionRepository, StationRepository, SystemRepository
from elite_bgs.schemas import Paginated, StationHistoryView, StationView
from elite_bgs.services.history import HistoryOutcome, HistoryWindow, join_history
from elite_bgs.services.references import collect_station_system_names, resolve_station_system
from elite_bgs.utils.rows import column_values


def station_view(station: Station) -> StationView:
    return StationView(
        **column_values(station),
        services=[item.name for item in station.services],
        selling_ships=[item.name for item in station.selling_ships],
        export_commodities=[item.name for item in station.export_commodities],
        selling_modules=[item.name for item in station.selling_modules],
    )


def with_history(view: StationView, outcome: HistoryOutcome) -> StationView:
    if outcome.error is not None:
        return view.model_copy(update={"history": None, "history_error": outcome.error})
    records = [StationHistoryView(**record) for record in outcome.records]
    return view.model_copy(update={"history": records})


async def search_stations(
    params: StationParams,
    history: HistoryParams,
    *,
    is_admin: bool,
    stations: StationRepository,
    factions: FactionRepository,
    systems: SystemRepository,
) -> Paginated[StationView]:
    window = HistoryWindow.from_params(history.timemin, history.timemax, history.count)

    spec = await build_station_filter(params, factions, systems)
    ensure_bounded(spec, is_admin)
    page = await stations.find_page(spec, params.page)
    views = [station_view(station) for station in page.docs]

    if window is not None:
        outcomes = await join_history(
            [view.id for view in views],
            lambda station_id: stations.history(station_id, window),
            "station",
        )
        views = [with_history(view, outcomes[view.id]) for view in views]

    if params.system_details:
        systems_by_name = await systems.find_by_names(collect_station_system_names(views))
        views = [resolve_station_system(view, systems_by_name) for view in views]
    return Paginated[StationView](
        docs=views, total=page.total, pages=page.pages, page=page.page, limit=page.limit
    )
