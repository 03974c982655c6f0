"""System search: filter, page, attach history, resolve factions."""
import logging

from elite_bgs.models import System
from elite_bgs.query.builders import build_system_filter, ensure_bounded
from elite_bgs.query.params import HistoryParams, SystemParams
from elite_bgs.repositories import FactionRepository, SystemRepository
from elite_bgs.schemas import (
    FactionHistoryInSystem,
    Paginated,
    SystemFactionView,
    SystemHistoryView,
    SystemView,
)
from elite_bgs.services.history import HistoryOutcome, HistoryWindow, join_history, strip_history
from elite_bgs.services.references import collect_system_faction_names, resolve_system_factions
from elite_bgs.utils.concurrency import settle_all
from elite_bgs.utils.rows import column_values

logger = logging.getLogger(__name__)


def system_view(system: System) -> SystemView:
    return SystemView(
        **column_values(system),
        factions=[SystemFactionView(name=f.name, name_lower=f.name_lower) for f in system.factions],
    )


def with_history(view: SystemView, outcome: HistoryOutcome) -> SystemView:
    if outcome.error is not None:
        return view.model_copy(update={"history": None, "history_error": outcome.error})
    records = [SystemHistoryView(**record) for record in outcome.records]
    return view.model_copy(update={"history": records})


def faction_history_record(row) -> FactionHistoryInSystem:
    return FactionHistoryInSystem(
        **strip_history(row, "faction"),
        faction=row.faction_name_lower,
        faction_name=row.faction_name,
    )


async def attach_faction_history(
    views: list[SystemView], factions: FactionRepository, window: HistoryWindow
) -> list[SystemView]:
    """Faction history recorded in each system during ``window``."""
    outcomes = await settle_all(
        factions.history_in_system(view.name_lower, window) for view in views
    )
    attached = []
    for view, outcome in zip(views, outcomes):
        if outcome.ok:
            records = [faction_history_record(row) for row in outcome.value]
            attached.append(view.model_copy(update={"faction_history": records}))
        else:
            logger.warning(f"Faction history for system {view.id} failed: {outcome.error!r}")
            attached.append(
                view.model_copy(
                    update={"faction_history_error": f"Faction history unavailable: {outcome.error}"}
                )
            )
    return attached


async def search_systems(
    params: SystemParams,
    history: HistoryParams,
    *,
    is_admin: bool,
    systems: SystemRepository,
    factions: FactionRepository,
) -> Paginated[SystemView]:
    window = HistoryWindow.from_params(history.timemin, history.timemax, history.count)

    spec = build_system_filter(params)
    ensure_bounded(spec, is_admin)
    page = await systems.find_page(spec, params.page)
    views = [system_view(system) for system in page.docs]

    if window is not None:
        outcomes = await join_history(
            [view.id for view in views],
            lambda system_id: systems.history(system_id, window),
            "system",
        )
        views = [with_history(view, outcomes[view.id]) for view in views]
        if params.faction_history and not window.is_count:
            views = await attach_faction_history(views, factions, window)

    factions_by_name = await factions.find_by_names(collect_system_faction_names(views))
    views = [
        resolve_system_factions(view, factions_by_name, details=params.faction_details)
        for view in views
    ]
    return Paginated[SystemView](
        docs=views, total=page.total, pages=page.pages, page=page.page, limit=page.limit
    )
