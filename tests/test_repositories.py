"""Tests for filter compilation and repository queries against SQLite."""

import pytest
from sqlalchemy import func, select

from elite_bgs.models import Faction, Station, StationShip
from elite_bgs.query.compiler import FACTION_FIELDS, compile_clause
from elite_bgs.query.filters import AllOf, AnyOf, AtLeast, Equals, FilterSpec, LessThan, Prefix
from elite_bgs.repositories import FactionRepository, StationRepository, SystemRepository
from elite_bgs.services.history import HistoryWindow
from elite_bgs.services.pagination import paginate

from .conftest import DAY, T0


async def _names(repository, spec: FilterSpec) -> list[str]:
    page = await repository.find_page(spec, 1)
    return [doc.name for doc in page.docs]


def test_unknown_field_is_rejected():
    with pytest.raises(ValueError):
        compile_clause(Equals("nonsense", 1), FACTION_FIELDS)


async def test_prefix_matches_literally(sessions):
    async with sessions() as session:
        session.add_all([Faction(name=n) for n in ("A.B Corp", "AxB Corp", "A_B Corp", "A%B Corp")])
        await session.commit()
    factions = FactionRepository(sessions)

    assert await _names(factions, FilterSpec([Prefix("name_lower", "a.b")])) == ["A.B Corp"]
    assert await _names(factions, FilterSpec([Prefix("name_lower", "a_b")])) == ["A_B Corp"]
    assert await _names(factions, FilterSpec([Prefix("name_lower", "a%")])) == ["A%B Corp"]


async def test_all_of_requires_every_value(sessions, seeded):
    stations = StationRepository(sessions)

    both = await _names(stations, FilterSpec([AllOf("ships", ("sidewinder", "anaconda"))]))
    one = await _names(stations, FilterSpec([AllOf("ships", ("sidewinder",))]))

    assert both == ["Abraham Lincoln"]
    assert one == ["Abraham Lincoln", "Daedalus"]


async def test_all_of_on_selling_modules(sessions, seeded):
    stations = StationRepository(sessions)

    both = await _names(stations, FilterSpec([AllOf("modules", ("128064037", "128049250"))]))
    one = await _names(stations, FilterSpec([AllOf("modules", ("128064037",))]))
    missing = await _names(stations, FilterSpec([AllOf("modules", ("128064037", "999"))]))

    assert both == ["Abraham Lincoln"]
    assert one == ["Abraham Lincoln", "Daedalus"]
    assert missing == []


async def test_any_of_on_child_table(sessions, seeded):
    stations = StationRepository(sessions)
    names = await _names(stations, FilterSpec([AnyOf("commodities", ("silver", "platinum"))]))
    assert names == ["Abraham Lincoln", "Hutton Orbital"]


async def test_landing_pad_is_ordinal(sessions, seeded):
    stations = StationRepository(sessions)
    spec = FilterSpec([AtLeast("max_landing_pad_size", "m", ("s", "m", "l"))])
    assert await _names(stations, spec) == ["Abraham Lincoln", "Daedalus", "Hutton Orbital"]


async def test_unknown_landing_pad_allows_all_sizes(sessions, seeded):
    stations = StationRepository(sessions)
    spec = FilterSpec([AtLeast("max_landing_pad_size", "xl", ("s", "m", "l"))])
    assert len(await _names(stations, spec)) == 4


async def test_distance_is_strictly_less(sessions, seeded):
    stations = StationRepository(sessions)
    spec = FilterSpec([LessThan("distance_from_star", 1000.0)])
    assert await _names(stations, spec) == ["Abraham Lincoln", "Haberlandt Survey"]


async def test_presence_state_filter_respects_kind(sessions, seeded):
    factions = FactionRepository(sessions)
    assert await _names(factions, FilterSpec([Equals("active_state", "boom")])) == ["Mother Gaia"]
    assert await _names(factions, FilterSpec([Equals("pending_state", "boom")])) == []
    assert await _names(factions, FilterSpec([Equals("recovering_state", "war")])) == ["Mother Gaia"]


async def test_find_ids(sessions, seeded):
    systems = SystemRepository(sessions)
    ids = await systems.find_ids(FilterSpec([Equals("needs_permit", True)]))
    assert set(ids) == {seeded["sol"], seeded["achenar"]}


async def test_find_by_names_skips_missing(sessions, seeded):
    systems = SystemRepository(sessions)
    found = await systems.find_by_names(["sol", "lost system"])
    assert list(found) == ["sol"]
    assert found["sol"].id == seeded["sol"]


async def test_find_by_names_with_nothing_to_find(sessions):
    assert await SystemRepository(sessions).find_by_names([]) == {}


async def test_pages_are_fixed_size(sessions):
    async with sessions() as session:
        session.add_all([Faction(name=f"Faction {i:02d}") for i in range(23)])
        await session.commit()
    factions = FactionRepository(sessions)

    third = await factions.find_page(FilterSpec(), 3)
    below_one = await factions.find_page(FilterSpec(), 0)

    assert (third.total, third.pages, len(third.docs)) == (23, 3, 3)
    assert [f.name for f in below_one.docs][0] == "Faction 00"
    assert below_one.page == 1


async def test_paginate_with_separate_count_statement(sessions, seeded):
    stmt = select(Faction).order_by(Faction.name_lower)
    async with sessions() as session:
        page = await paginate(session, stmt, 2, 2, 5.0, count_stmt=select(func.count(Faction.id)))

    assert (page.total, page.pages, page.page) == (3, 2, 2)
    assert [f.name for f in page.docs] == ["Sol Workers' Party"]


# =============================================================================
# History
# =============================================================================


async def test_history_time_window_is_inclusive(sessions, seeded):
    factions = FactionRepository(sessions)
    window = HistoryWindow(greater=T0, lesser=T0 + 2 * DAY)

    rows = await factions.history(seeded["gaia"], window)

    assert [row.influence for row in rows] == [0.5, 0.55, 0.2]


async def test_history_count_is_newest_first(sessions, seeded):
    factions = FactionRepository(sessions)
    rows = await factions.history(seeded["gaia"], HistoryWindow(count=2))
    assert [row.influence for row in rows] == [0.6, 0.1]


async def test_faction_history_in_system(sessions, seeded):
    factions = FactionRepository(sessions)
    window = HistoryWindow(greater=T0, lesser=T0 + 5 * DAY)

    rows = await factions.history_in_system("sol", window)

    assert [(row.faction_name, row.influence) for row in rows] == [
        ("Mother Gaia", 0.5),
        ("Mother Gaia", 0.55),
        ("Sol Workers' Party", 0.3),
    ]


def test_station_items_named_helper():
    ship = StationShip.named("Anaconda")
    assert (ship.name, ship.name_lower) == ("Anaconda", "anaconda")


def test_station_validators_keep_lower_names():
    station = Station(name="Jameson Memorial", system="Shinrarta Dezhra")
    assert station.name_lower == "jameson memorial"
    assert station.system_lower == "shinrarta dezhra"
