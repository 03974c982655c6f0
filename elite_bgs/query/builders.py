"""Build ``FilterSpec`` objects from entity search parameters."""
import logging
import uuid
from typing import Protocol

from elite_bgs.exceptions import UsageError
from elite_bgs.query.filters import AllOf, AnyOf, AtLeast, Equals, FilterSpec, LessThan, Prefix, one_or_any
from elite_bgs.query.params import (
    LANDING_PAD_SIZES,
    FactionParams,
    StationParams,
    SystemParams,
    parse_ids,
    parse_ints,
    split_values,
)
from elite_bgs.utils.concurrency import settle

logger = logging.getLogger(__name__)

FACILITY_FLAGS = {
    "blackmarket": "has_blackmarket",
    "market": "has_market",
    "refuel": "has_refuel",
    "repair": "has_repair",
    "restock": "has_rearm",
    "outfitting": "has_outfitting",
    "shipyard": "has_shipyard",
}


class IdLookup(Protocol):
    async def find_ids(self, spec: FilterSpec) -> list[uuid.UUID]: ...


def _add_values(spec: FilterSpec, field_name: str, raw: str | None) -> None:
    values = split_values(raw)
    if values:
        spec.add(one_or_any(field_name, values))


def _add_identity(spec: FilterSpec, id_raw: str | None, eddb_id_raw: str | None) -> None:
    ids = parse_ids(id_raw)
    if ids:
        spec.add(one_or_any("id", ids))
    eddb_ids = parse_ints(eddb_id_raw)
    if eddb_ids:
        spec.add(one_or_any("eddb_id", eddb_ids))


def _add_begins_with(spec: FilterSpec, raw: str | None) -> None:
    if raw:
        spec.add(Prefix("name_lower", raw.lower()))


def build_faction_filter(params: FactionParams) -> FilterSpec:
    spec = FilterSpec()
    _add_identity(spec, params.id, params.eddb_id)
    _add_values(spec, "name_lower", params.name)
    _add_values(spec, "allegiance", params.allegiance)
    _add_values(spec, "government", params.government)
    _add_begins_with(spec, params.begins_with)
    _add_values(spec, "system_name_lower", params.system)
    system_ids = parse_ids(params.systemid)
    if system_ids:
        spec.add(one_or_any("system_id", system_ids))
    _add_values(spec, "active_state", params.active_state)
    _add_values(spec, "pending_state", params.pending_state)
    _add_values(spec, "recovering_state", params.recovering_state)
    return spec


def system_constraints(
    power: str | None, power_state: str | None, permit: bool | None
) -> FilterSpec:
    """Constraints on the power play fields of a system."""
    spec = FilterSpec()
    powers = split_values(power)
    if powers:
        spec.add(AnyOf("power", tuple(powers)))
    power_states = split_values(power_state)
    if power_states:
        spec.add(AnyOf("power_state", tuple(power_states)))
    if permit is not None:
        spec.add(Equals("needs_permit", permit))
    return spec


def build_system_filter(params: SystemParams) -> FilterSpec:
    spec = FilterSpec()
    _add_identity(spec, params.id, params.eddb_id)
    _add_values(spec, "name_lower", params.name)
    _add_values(spec, "allegiance", params.allegiance)
    _add_values(spec, "government", params.government)
    _add_values(spec, "state", params.state)
    _add_values(spec, "primary_economy", params.primary_economy)
    _add_values(spec, "secondary_economy", params.secondary_economy)
    _add_values(spec, "security", params.security)
    _add_begins_with(spec, params.begins_with)
    _add_values(spec, "faction", params.faction)
    spec.extend(system_constraints(params.power, params.power_state, params.permit))
    return spec


def _facility_clauses(raw: str | None) -> list[Equals]:
    clauses = []
    for facility in split_values(raw):
        if facility not in FACILITY_FLAGS:
            raise UsageError(
                f"Unknown facility '{facility}'. Known: {', '.join(sorted(FACILITY_FLAGS))}"
            )
        clauses.append(Equals(FACILITY_FLAGS[facility], True))
    return clauses


async def build_station_filter(
    params: StationParams, factions: IdLookup, systems: IdLookup
) -> FilterSpec:
    """Station filter, including constraints resolved against factions and systems.

    The controlling faction and the power play parameters live on other
    collections. Their ids are looked up concurrently; a lookup that fails is
    logged and its constraint dropped, so the search runs broader than asked.
    """
    spec = FilterSpec()
    _add_identity(spec, params.id, params.eddb_id)
    _add_values(spec, "name_lower", params.name)
    _add_begins_with(spec, params.begins_with)
    types = split_values(params.type)
    if types:
        spec.add(AnyOf("type", tuple(types)))
    _add_values(spec, "system_lower", params.system)
    _add_values(spec, "economy", params.economy)
    _add_values(spec, "allegiance", params.allegiance)
    _add_values(spec, "government", params.government)
    _add_values(spec, "state", params.state)
    services = split_values(params.services)
    if services:
        spec.add(AnyOf("services", tuple(services)))
    ships = split_values(params.ships)
    if ships:
        spec.add(AllOf("ships", tuple(ships)))
    modules = split_values(params.moduleid)
    if modules:
        spec.add(AllOf("modules", tuple(modules)))
    commodities = split_values(params.commodities)
    if commodities:
        spec.add(AllOf("commodities", tuple(commodities)))
    spec.extend(_facility_clauses(params.facilities))
    if params.min_landing_pad:
        spec.add(AtLeast("max_landing_pad_size", params.min_landing_pad.lower(), LANDING_PAD_SIZES))
    if params.distance_star is not None:
        spec.add(LessThan("distance_from_star", params.distance_star))
    if params.planetary is not None:
        spec.add(Equals("is_planetary", params.planetary))

    lookups = {}
    faction_names = split_values(params.controlling_faction)
    if faction_names:
        lookups["controlling_minor_faction_id"] = factions.find_ids(
            FilterSpec([one_or_any("name_lower", faction_names)])
        )
    system_spec = system_constraints(params.power, params.power_state, params.permit)
    if not system_spec.is_empty():
        lookups["system_id"] = systems.find_ids(system_spec)

    outcomes = await settle(**lookups)
    for field_name, outcome in outcomes.items():
        if outcome.ok:
            spec.add(AnyOf(field_name, tuple(outcome.value)))
        else:
            logger.warning(
                f"Lookup for station {field_name} failed, searching without it: {outcome.error!r}"
            )
    return spec


def ensure_bounded(spec: FilterSpec, is_admin: bool) -> None:
    """Unfiltered searches are reserved for admins."""
    if spec.is_empty() and not is_admin:
        raise UsageError("Add at least 1 query parameter to limit traffic")
