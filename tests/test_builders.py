"""Tests for translating search parameters into filter specs."""

import uuid
from unittest.mock import AsyncMock

import pytest

from elite_bgs.exceptions import UsageError
from elite_bgs.query.builders import (
    build_faction_filter,
    build_station_filter,
    build_system_filter,
    ensure_bounded,
)
from elite_bgs.query.filters import AllOf, AnyOf, AtLeast, Equals, FilterSpec, LessThan, Prefix
from elite_bgs.query.params import FactionParams, StationParams, SystemParams

# =============================================================================
# Factions and systems
# =============================================================================


def test_empty_faction_params_give_empty_filter():
    assert build_faction_filter(FactionParams()).is_empty()


def test_single_value_is_equality_and_many_is_any_of():
    spec = build_faction_filter(FactionParams(allegiance="Federation", government="democracy, anarchy"))
    assert list(spec) == [
        Equals("allegiance", "federation"),
        AnyOf("government", ("democracy", "anarchy")),
    ]


def test_begins_with_is_lowercase_prefix():
    spec = build_faction_filter(FactionParams(begins_with="Mother G"))
    assert list(spec) == [Prefix("name_lower", "mother g")]


def test_overlapping_name_filters_are_all_applied():
    spec = build_faction_filter(FactionParams(name="Mother Gaia", begins_with="Moth"))
    assert spec.fields() == {"name_lower"}
    assert len(spec) == 2


def test_faction_state_filters():
    spec = build_faction_filter(FactionParams(active_state="boom", pending_state="war,expansion"))
    assert Equals("active_state", "boom") in spec.clauses
    assert AnyOf("pending_state", ("war", "expansion")) in spec.clauses


def test_faction_system_id_filter():
    system_id = uuid.uuid4()
    spec = build_faction_filter(FactionParams(systemid=str(system_id)))
    assert list(spec) == [Equals("system_id", system_id)]


def test_system_filter_power_and_permit():
    spec = build_system_filter(SystemParams(power="Zachary Hudson", power_state="controlled", permit=False))
    assert list(spec) == [
        AnyOf("power", ("zachary hudson",)),
        AnyOf("power_state", ("controlled",)),
        Equals("needs_permit", False),
    ]


def test_system_faction_filter():
    spec = build_system_filter(SystemParams(faction="Mother Gaia"))
    assert list(spec) == [Equals("faction", "mother gaia")]


# =============================================================================
# Stations
# =============================================================================


@pytest.fixture
def lookups():
    factions = AsyncMock()
    systems = AsyncMock()
    return factions, systems


async def test_station_list_fields(lookups):
    spec = await build_station_filter(
        StationParams(
            type="orbis",
            services="dock,refuel",
            ships="Sidewinder, Anaconda",
            commodities="gold",
            moduleid="128064037,128049250",
        ),
        *lookups,
    )
    assert AnyOf("type", ("orbis",)) in spec.clauses
    assert AnyOf("services", ("dock", "refuel")) in spec.clauses
    assert AllOf("ships", ("sidewinder", "anaconda")) in spec.clauses
    assert AllOf("commodities", ("gold",)) in spec.clauses
    assert AllOf("modules", ("128064037", "128049250")) in spec.clauses


async def test_station_numeric_fields(lookups):
    spec = await build_station_filter(
        StationParams(min_landing_pad="M", distance_star=1000.0, planetary=True), *lookups
    )
    assert AtLeast("max_landing_pad_size", "m", ("s", "m", "l")) in spec.clauses
    assert LessThan("distance_from_star", 1000.0) in spec.clauses
    assert Equals("is_planetary", True) in spec.clauses


async def test_facilities_map_to_flags(lookups):
    spec = await build_station_filter(StationParams(facilities="restock,blackmarket"), *lookups)
    assert list(spec) == [Equals("has_rearm", True), Equals("has_blackmarket", True)]


async def test_unknown_facility_is_usage_error(lookups):
    with pytest.raises(UsageError):
        await build_station_filter(StationParams(facilities="casino"), *lookups)


async def test_controlling_faction_resolves_to_ids(lookups):
    factions, systems = lookups
    faction_id = uuid.uuid4()
    factions.find_ids.return_value = [faction_id]

    spec = await build_station_filter(StationParams(controlling_faction="Mother Gaia"), factions, systems)

    assert list(spec) == [AnyOf("controlling_minor_faction_id", (faction_id,))]
    lookup_spec = factions.find_ids.call_args.args[0]
    assert list(lookup_spec) == [Equals("name_lower", "mother gaia")]
    systems.find_ids.assert_not_called()


async def test_power_constraints_resolve_against_systems(lookups):
    factions, systems = lookups
    system_id = uuid.uuid4()
    systems.find_ids.return_value = [system_id]

    spec = await build_station_filter(StationParams(power="zachary hudson", permit=True), factions, systems)

    assert list(spec) == [AnyOf("system_id", (system_id,))]


async def test_failed_lookup_drops_only_its_constraint(lookups, caplog):
    factions, systems = lookups
    factions.find_ids.side_effect = RuntimeError("factions offline")
    system_id = uuid.uuid4()
    systems.find_ids.return_value = [system_id]

    spec = await build_station_filter(
        StationParams(name="Daedalus", controlling_faction="mother gaia", power="zachary hudson"),
        factions,
        systems,
    )

    assert list(spec) == [Equals("name_lower", "daedalus"), AnyOf("system_id", (system_id,))]
    assert "controlling_minor_faction_id" in caplog.text


async def test_lookup_with_no_matches_keeps_empty_constraint(lookups):
    factions, systems = lookups
    factions.find_ids.return_value = []

    spec = await build_station_filter(StationParams(controlling_faction="nobody"), factions, systems)

    assert list(spec) == [AnyOf("controlling_minor_faction_id", ())]


# =============================================================================
# Guard
# =============================================================================


def test_empty_filter_rejected_for_non_admin():
    with pytest.raises(UsageError, match="Add at least 1 query parameter"):
        ensure_bounded(FilterSpec(), is_admin=False)


def test_empty_filter_allowed_for_admin():
    ensure_bounded(FilterSpec(), is_admin=True)


def test_non_empty_filter_allowed_for_anyone():
    ensure_bounded(FilterSpec([Equals("name_lower", "sol")]), is_admin=False)
