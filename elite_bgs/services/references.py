"""Resolve by-name references between factions, systems and stations.

Stored documents point at each other through lower-case names. A page is
resolved by collecting every referenced name up front, loading the targets
in one lookup, and then building new views from the base view and that
lookup table. A name without a target is marked ``unresolved`` with no id.
"""
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from elite_bgs.schemas import (
    FactionSummary,
    FactionView,
    StateEntry,
    StationView,
    SystemSummary,
    SystemView,
)

logger = logging.getLogger(__name__)

RESOLVED = "resolved"
UNRESOLVED = "unresolved"


def presence_states(presence: Any, kind: str) -> list[StateEntry]:
    return [
        StateEntry(state=entry.state, trend=entry.trend)
        for entry in presence.states
        if entry.kind == kind
    ]


def _unresolved(kind: str, name: str, owner: str) -> None:
    logger.warning(f"Unresolved {kind} reference '{name}' on {owner}")


# Factions -> systems


def collect_faction_system_names(views: Iterable[FactionView]) -> set[str]:
    names: set[str] = set()
    for view in views:
        names.update(p.system_name_lower for p in view.faction_presence or ())
        names.update(record.system_lower for record in view.history or ())
    return names


def resolve_faction_systems(
    view: FactionView, systems: Mapping[str, Any], *, details: bool = False
) -> FactionView:
    presence = None
    if view.faction_presence is not None:
        presence = []
        for entry in view.faction_presence:
            system = systems.get(entry.system_name_lower)
            if system is None:
                _unresolved("system", entry.system_name_lower, f"faction {view.name_lower}")
                presence.append(entry.model_copy(update={"system_id": None, "status": UNRESOLVED}))
                continue
            update = {
                "system_id": system.id,
                "status": RESOLVED,
                "population": system.population,
                "controlling": system.controlling_minor_faction == view.name_lower,
            }
            if details:
                update["system_details"] = SystemSummary.model_validate(system)
            presence.append(entry.model_copy(update=update))

    history = None
    if view.history is not None:
        history = []
        for record in view.history:
            system = systems.get(record.system_lower)
            if system is None:
                _unresolved("system", record.system_lower, f"faction {view.name_lower} history")
                history.append(record.model_copy(update={"system_status": UNRESOLVED}))
            else:
                history.append(
                    record.model_copy(update={"system_id": system.id, "system_status": RESOLVED})
                )

    return view.model_copy(update={"faction_presence": presence, "history": history})


# Systems -> factions


def collect_system_faction_names(views: Iterable[SystemView]) -> set[str]:
    names: set[str] = set()
    for view in views:
        names.update(ref.name_lower for ref in view.factions)
        for record in view.history or ():
            names.update(ref.name_lower for ref in record.factions)
    return names


def _presence_in(faction: Any, system_name_lower: str) -> Any:
    return next(
        (p for p in faction.presence if p.system_name_lower == system_name_lower),
        None,
    )


def resolve_system_factions(
    view: SystemView, factions: Mapping[str, Any], *, details: bool = False
) -> SystemView:
    resolved = []
    for ref in view.factions:
        faction = factions.get(ref.name_lower)
        if faction is None:
            _unresolved("faction", ref.name_lower, f"system {view.name_lower}")
            resolved.append(ref.model_copy(update={"faction_id": None, "status": UNRESOLVED}))
            continue
        update: dict[str, Any] = {"faction_id": faction.id, "status": RESOLVED}
        presence = _presence_in(faction, view.name_lower)
        if presence is not None:
            update.update(
                influence=presence.influence,
                state=presence.state,
                active_states=presence_states(presence, "active"),
                pending_states=presence_states(presence, "pending"),
                recovering_states=presence_states(presence, "recovering"),
                updated_at=presence.updated_at,
            )
        if details:
            update["faction_details"] = FactionSummary.model_validate(faction)
        resolved.append(ref.model_copy(update=update))

    history = None
    if view.history is not None:
        history = []
        for record in view.history:
            refs = []
            for ref in record.factions:
                faction = factions.get(ref.name_lower)
                if faction is None:
                    _unresolved("faction", ref.name_lower, f"system {view.name_lower} history")
                    refs.append(ref.model_copy(update={"faction_id": None, "status": UNRESOLVED}))
                else:
                    refs.append(ref.model_copy(update={"faction_id": faction.id, "status": RESOLVED}))
            history.append(record.model_copy(update={"factions": refs}))

    return view.model_copy(update={"factions": resolved, "history": history})


# Stations -> systems


def collect_station_system_names(views: Iterable[StationView]) -> set[str]:
    return {view.system_lower for view in views if view.system_lower}


def resolve_station_system(view: StationView, systems: Mapping[str, Any]) -> StationView:
    if not view.system_lower:
        return view
    system = systems.get(view.system_lower)
    if system is None:
        _unresolved("system", view.system_lower, f"station {view.name_lower}")
        return view.model_copy(update={"system_status": UNRESOLVED, "system_details": None})
    return view.model_copy(
        update={
            "system_id": system.id,
            "system_status": RESOLVED,
            "system_details": SystemSummary.model_validate(system),
        }
    )
