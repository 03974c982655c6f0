"""Faction search: filter, page, attach history, resolve systems."""
from typing import Any

from elite_bgs.exceptions import UsageError
from elite_bgs.models import Faction, FactionHistory
from elite_bgs.query.builders import build_faction_filter, ensure_bounded
from elite_bgs.query.params import FactionParams, HistoryParams, parse_ids, split_values
from elite_bgs.repositories import FactionRepository, SystemRepository
from elite_bgs.schemas import FactionHistoryView, FactionPresenceView, FactionView, Paginated
from elite_bgs.services.history import HistoryOutcome, HistoryWindow, join_history
from elite_bgs.services.references import (
    collect_faction_system_names,
    presence_states,
    resolve_faction_systems,
)
from elite_bgs.utils.rows import column_values


def faction_view(faction: Faction, *, minimal: bool = False) -> FactionView:
    view = FactionView(**column_values(faction))
    if minimal:
        return view
    presence = [
        FactionPresenceView(
            system_name=p.system_name,
            system_name_lower=p.system_name_lower,
            system_id=p.system_id,
            influence=p.influence,
            state=p.state,
            happiness=p.happiness,
            active_states=presence_states(p, "active"),
            pending_states=presence_states(p, "pending"),
            recovering_states=presence_states(p, "recovering"),
            updated_at=p.updated_at,
        )
        for p in faction.presence
    ]
    return view.model_copy(update={"faction_presence": presence})


def history_criteria(
    faction: Faction, params: FactionParams, window: HistoryWindow
) -> list[Any]:
    """Restrict a faction's history to the systems the request is about.

    With ``filterSystemInHistory`` the history follows the system filter of
    the request. Otherwise a count window only covers the systems the
    faction is present in now.
    """
    if params.filter_system_in_history:
        names = split_values(params.system)
        if names:
            return [FactionHistory.system_lower.in_(names)]
        ids = parse_ids(params.systemid)
        if ids:
            return [FactionHistory.system_id.in_(ids)]
        return []
    if window.is_count:
        return [FactionHistory.system_lower.in_([p.system_name_lower for p in faction.presence])]
    return []


def with_history(view: FactionView, outcome: HistoryOutcome) -> FactionView:
    if outcome.error is not None:
        return view.model_copy(update={"history": None, "history_error": outcome.error})
    records = [FactionHistoryView(**record) for record in outcome.records]
    return view.model_copy(update={"history": records})


async def search_factions(
    params: FactionParams,
    history: HistoryParams,
    *,
    is_admin: bool,
    factions: FactionRepository,
    systems: SystemRepository,
) -> Paginated[FactionView]:
    window = HistoryWindow.from_params(history.timemin, history.timemax, history.count)
    if params.minimal and window is not None and window.is_count:
        raise UsageError("Minimal cannot work with History")

    spec = build_faction_filter(params)
    ensure_bounded(spec, is_admin)
    page = await factions.find_page(spec, params.page)
    views = [faction_view(faction, minimal=params.minimal) for faction in page.docs]

    if window is not None:
        criteria = {f.id: history_criteria(f, params, window) for f in page.docs}
        outcomes = await join_history(
            list(criteria),
            lambda faction_id: factions.history(faction_id, window, criteria[faction_id]),
            "faction",
        )
        views = [with_history(view, outcomes[view.id]) for view in views]

    systems_by_name = await systems.find_by_names(collect_faction_system_names(views))
    views = [
        resolve_faction_systems(view, systems_by_name, details=params.system_details)
        for view in views
    ]
    return Paginated[FactionView](
        docs=views, total=page.total, pages=page.pages, page=page.page, limit=page.limit
    )
