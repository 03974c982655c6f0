"""Compile a ``FilterSpec`` into SQLAlchemy criteria.

Each entity publishes a field table mapping logical field names to a column,
optionally reached through one or more relationships (child tables). Clauses
on such fields become ``EXISTS`` subqueries via ``relationship.any()``.
"""
from dataclasses import dataclass
from typing import Any

from sqlalchemy import and_, true
from sqlalchemy.sql.elements import ColumnElement

from elite_bgs.models import (
    Faction,
    FactionPresence,
    PresenceState,
    Station,
    StationCommodity,
    StationModule,
    StationService,
    StationShip,
    System,
    SystemFaction,
)
from elite_bgs.query.filters import AllOf, AnyOf, AtLeast, Clause, Equals, FilterSpec, LessThan, Prefix
from elite_bgs.query.params import escape_like


@dataclass(frozen=True)
class Field:
    column: Any
    via: tuple[Any, ...] = ()
    where: tuple[Any, ...] = ()  # extra criteria on the innermost child row


def _presence_state(kind: str) -> Field:
    return Field(
        PresenceState.state,
        via=(Faction.presence, FactionPresence.states),
        where=(PresenceState.kind == kind,),
    )


FACTION_FIELDS: dict[str, Field] = {
    "id": Field(Faction.id),
    "eddb_id": Field(Faction.eddb_id),
    "name_lower": Field(Faction.name_lower),
    "allegiance": Field(Faction.allegiance),
    "government": Field(Faction.government),
    "system_name_lower": Field(FactionPresence.system_name_lower, via=(Faction.presence,)),
    "system_id": Field(FactionPresence.system_id, via=(Faction.presence,)),
    "active_state": _presence_state("active"),
    "pending_state": _presence_state("pending"),
    "recovering_state": _presence_state("recovering"),
}

SYSTEM_FIELDS: dict[str, Field] = {
    "id": Field(System.id),
    "eddb_id": Field(System.eddb_id),
    "name_lower": Field(System.name_lower),
    "allegiance": Field(System.allegiance),
    "government": Field(System.government),
    "state": Field(System.state),
    "primary_economy": Field(System.primary_economy),
    "secondary_economy": Field(System.secondary_economy),
    "security": Field(System.security),
    "faction": Field(SystemFaction.name_lower, via=(System.factions,)),
    "power": Field(System.power),
    "power_state": Field(System.power_state),
    "needs_permit": Field(System.needs_permit),
}

STATION_FIELDS: dict[str, Field] = {
    "id": Field(Station.id),
    "eddb_id": Field(Station.eddb_id),
    "name_lower": Field(Station.name_lower),
    "type": Field(Station.type),
    "system_lower": Field(Station.system_lower),
    "system_id": Field(Station.system_id),
    "economy": Field(Station.economy),
    "allegiance": Field(Station.allegiance),
    "government": Field(Station.government),
    "state": Field(Station.state),
    "controlling_minor_faction_id": Field(Station.controlling_minor_faction_id),
    "services": Field(StationService.name_lower, via=(Station.services,)),
    "ships": Field(StationShip.name_lower, via=(Station.selling_ships,)),
    "commodities": Field(StationCommodity.name_lower, via=(Station.export_commodities,)),
    "modules": Field(StationModule.name_lower, via=(Station.selling_modules,)),
    "max_landing_pad_size": Field(Station.max_landing_pad_size),
    "distance_from_star": Field(Station.distance_from_star),
    "is_planetary": Field(Station.is_planetary),
    "has_blackmarket": Field(Station.has_blackmarket),
    "has_market": Field(Station.has_market),
    "has_refuel": Field(Station.has_refuel),
    "has_repair": Field(Station.has_repair),
    "has_rearm": Field(Station.has_rearm),
    "has_outfitting": Field(Station.has_outfitting),
    "has_shipyard": Field(Station.has_shipyard),
}


def _through(field: Field, criterion: ColumnElement) -> ColumnElement:
    """Wrap a criterion on the innermost column in the field's relationships."""
    if not field.via:
        return criterion
    expr = and_(criterion, *field.where)
    for relationship in reversed(field.via):
        expr = relationship.any(expr)
    return expr


def compile_clause(clause: Clause, fields: dict[str, Field]) -> ColumnElement:
    try:
        field = fields[clause.field]
    except KeyError:
        raise ValueError(f"Field '{clause.field}' cannot be filtered on") from None
    column = field.column

    match clause:
        case Equals(value=value):
            return _through(field, column == value)
        case AnyOf(values=values):
            return _through(field, column.in_(values))
        case AllOf(values=values):
            if not values:
                return true()
            return and_(*(_through(field, column == value) for value in values))
        case Prefix(prefix=prefix):
            return _through(field, column.like(f"{escape_like(prefix)}%", escape="\\"))
        case AtLeast(minimum=minimum, scale=scale):
            allowed = scale[scale.index(minimum):] if minimum in scale else scale
            return _through(field, column.in_(allowed))
        case LessThan(value=value):
            return _through(field, column < value)
        case _:
            raise TypeError(f"Unsupported filter clause {clause!r}")


def compile_filter(spec: FilterSpec, fields: dict[str, Field]) -> list[ColumnElement]:
    return [compile_clause(clause, fields) for clause in spec]
