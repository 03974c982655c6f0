"""Request parameters accepted by the entity search endpoints.

The parameter classes double as FastAPI dependencies (``Depends()``); every
field is optional and arrives as the raw query-string value.
"""
import re
import uuid
from typing import Annotated

from fastapi import Query

from elite_bgs.exceptions import UsageError

_VALUE_SEPARATOR = re.compile(r"\s*,\s*")

LANDING_PAD_SIZES = ("s", "m", "l")


def split_values(raw: str | None) -> list[str]:
    """Split a comma separated parameter into lower-cased values."""
    if raw is None:
        return []
    return [value.lower() for value in _VALUE_SEPARATOR.split(raw.strip()) if value]


def parse_ids(raw: str | None) -> list[uuid.UUID]:
    try:
        return [uuid.UUID(value) for value in split_values(raw)]
    except ValueError as exc:
        raise UsageError(f"Invalid id in '{raw}'") from exc


def parse_ints(raw: str | None) -> list[int]:
    try:
        return [int(value) for value in split_values(raw)]
    except ValueError as exc:
        raise UsageError(f"Invalid integer in '{raw}'") from exc


def escape_like(value: str, escape: str = "\\") -> str:
    """Escape LIKE metacharacters so ``value`` matches literally."""
    return (
        value.replace(escape, escape * 2)
        .replace("%", f"{escape}%")
        .replace("_", f"{escape}_")
    )


class HistoryParams:
    def __init__(
        self,
        timemin: Annotated[int | None, Query(description="History window start, epoch milliseconds")] = None,
        timemax: Annotated[int | None, Query(description="History window end, epoch milliseconds")] = None,
        count: Annotated[int | None, Query(ge=1, description="Most recent history records to return")] = None,
    ):
        self.timemin = timemin
        self.timemax = timemax
        self.count = count


class FactionParams:
    def __init__(
        self,
        id: Annotated[str | None, Query()] = None,
        eddb_id: Annotated[str | None, Query(alias="eddbId")] = None,
        name: Annotated[str | None, Query()] = None,
        allegiance: Annotated[str | None, Query()] = None,
        government: Annotated[str | None, Query()] = None,
        begins_with: Annotated[str | None, Query(alias="beginsWith")] = None,
        system: Annotated[str | None, Query()] = None,
        systemid: Annotated[str | None, Query()] = None,
        filter_system_in_history: Annotated[bool, Query(alias="filterSystemInHistory")] = False,
        active_state: Annotated[str | None, Query(alias="activeState")] = None,
        pending_state: Annotated[str | None, Query(alias="pendingState")] = None,
        recovering_state: Annotated[str | None, Query(alias="recoveringState")] = None,
        minimal: Annotated[bool, Query()] = False,
        system_details: Annotated[bool, Query(alias="systemDetails")] = False,
        page: Annotated[int, Query()] = 1,
    ):
        self.id = id
        self.eddb_id = eddb_id
        self.name = name
        self.allegiance = allegiance
        self.government = government
        self.begins_with = begins_with
        self.system = system
        self.systemid = systemid
        self.filter_system_in_history = filter_system_in_history
        self.active_state = active_state
        self.pending_state = pending_state
        self.recovering_state = recovering_state
        self.minimal = minimal
        self.system_details = system_details
        self.page = page


class SystemParams:
    def __init__(
        self,
        id: Annotated[str | None, Query()] = None,
        eddb_id: Annotated[str | None, Query(alias="eddbId")] = None,
        name: Annotated[str | None, Query()] = None,
        allegiance: Annotated[str | None, Query()] = None,
        government: Annotated[str | None, Query()] = None,
        state: Annotated[str | None, Query()] = None,
        primary_economy: Annotated[str | None, Query(alias="primaryeconomy")] = None,
        secondary_economy: Annotated[str | None, Query(alias="secondaryeconomy")] = None,
        security: Annotated[str | None, Query()] = None,
        begins_with: Annotated[str | None, Query(alias="beginsWith")] = None,
        faction: Annotated[str | None, Query(description="Factions present in the system")] = None,
        power: Annotated[str | None, Query()] = None,
        power_state: Annotated[str | None, Query(alias="powerstate")] = None,
        permit: Annotated[bool | None, Query()] = None,
        faction_details: Annotated[bool, Query(alias="factionDetails")] = False,
        faction_history: Annotated[bool, Query(alias="factionHistory")] = False,
        page: Annotated[int, Query()] = 1,
    ):
        self.id = id
        self.eddb_id = eddb_id
        self.name = name
        self.allegiance = allegiance
        self.government = government
        self.state = state
        self.primary_economy = primary_economy
        self.secondary_economy = secondary_economy
        self.security = security
        self.begins_with = begins_with
        self.faction = faction
        self.power = power
        self.power_state = power_state
        self.permit = permit
        self.faction_details = faction_details
        self.faction_history = faction_history
        self.page = page


class StationParams:
    def __init__(
        self,
        id: Annotated[str | None, Query()] = None,
        eddb_id: Annotated[str | None, Query(alias="eddbId")] = None,
        name: Annotated[str | None, Query()] = None,
        begins_with: Annotated[str | None, Query(alias="beginsWith")] = None,
        type: Annotated[str | None, Query()] = None,
        system: Annotated[str | None, Query()] = None,
        economy: Annotated[str | None, Query()] = None,
        allegiance: Annotated[str | None, Query()] = None,
        government: Annotated[str | None, Query()] = None,
        state: Annotated[str | None, Query()] = None,
        services: Annotated[str | None, Query(description="Any of these services")] = None,
        ships: Annotated[str | None, Query(description="All of these ships on sale")] = None,
        commodities: Annotated[str | None, Query(description="All of these commodities exported")] = None,
        moduleid: Annotated[str | None, Query(description="All of these modules on sale")] = None,
        facilities: Annotated[str | None, Query()] = None,
        min_landing_pad: Annotated[str | None, Query(alias="minlandingpad")] = None,
        distance_star: Annotated[float | None, Query(alias="distancestar")] = None,
        planetary: Annotated[bool | None, Query()] = None,
        controlling_faction: Annotated[str | None, Query(alias="controllingfaction")] = None,
        power: Annotated[str | None, Query()] = None,
        power_state: Annotated[str | None, Query(alias="powerstate")] = None,
        permit: Annotated[bool | None, Query()] = None,
        system_details: Annotated[bool, Query(alias="systemDetails")] = False,
        page: Annotated[int, Query()] = 1,
    ):
        self.id = id
        self.eddb_id = eddb_id
        self.name = name
        self.begins_with = begins_with
        self.type = type
        self.system = system
        self.economy = economy
        self.allegiance = allegiance
        self.government = government
        self.state = state
        self.services = services
        self.ships = ships
        self.commodities = commodities
        self.moduleid = moduleid
        self.facilities = facilities
        self.min_landing_pad = min_landing_pad
        self.distance_star = distance_star
        self.planetary = planetary
        self.controlling_faction = controlling_faction
        self.power = power
        self.power_state = power_state
        self.permit = permit
        self.system_details = system_details
        self.page = page
