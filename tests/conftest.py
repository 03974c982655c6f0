"""
Shared fixtures for the Elite BGS API tests.

Every test gets a fresh SQLite database in a temporary directory. A file is
used instead of ``:memory:`` so that the concurrent branches of a request,
each with its own session and connection, see the same data.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from elite_bgs.database import Base, get_session_factory
from elite_bgs.dependencies import Caller, get_current_user
from elite_bgs.main import app
from elite_bgs.models import (
    Donation,
    Faction,
    FactionHistory,
    FactionPresence,
    PresenceState,
    Station,
    StationCommodity,
    StationHistory,
    StationModule,
    StationService,
    StationShip,
    System,
    SystemFaction,
    SystemHistory,
    User,
)

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
DAY = timedelta(days=1)


def epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
async def sessions(tmp_path):
    """Session factory over an empty schema."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'bgs.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


def _presence(system_name, influence, state, **states):
    presence = FactionPresence(system_name=system_name, influence=influence, state=state, updated_at=T0)
    for kind, names in states.items():
        for name in names:
            presence.states.append(PresenceState(kind=kind, state=name, trend=0))
    return presence


def _station(name, system, items=(), modules=(), **fields):
    station = Station(name=name, system=system, updated_at=T0, **fields)
    services, ships, commodities = items or ((), (), ())
    station.services = [StationService.named(n) for n in services]
    station.selling_ships = [StationShip.named(n) for n in ships]
    station.export_commodities = [StationCommodity.named(n) for n in commodities]
    station.selling_modules = [StationModule.named(n) for n in modules]
    return station


@pytest.fixture
async def seeded(sessions):
    """
    A small galaxy.

    Sol lists a faction that does not exist ("Ghost Faction") and Hutton
    Orbital Truckers claim presence in a system that does not exist
    ("Lost System"); both are used to exercise unresolved references.
    """
    sol = System(
        name="Sol",
        allegiance="federation",
        government="democracy",
        state="boom",
        primary_economy="refinery",
        security="high",
        population=22780919531,
        controlling_minor_faction="mother gaia",
        power="zachary hudson",
        power_state="controlled",
        needs_permit=True,
        updated_at=T0,
    )
    sol.factions = [SystemFaction(name=n) for n in ("Mother Gaia", "Sol Workers' Party", "Ghost Faction")]
    alpha = System(
        name="Alpha Centauri",
        allegiance="independent",
        government="anarchy",
        state="none",
        security="low",
        population=0,
        controlling_minor_faction="hutton orbital truckers",
        needs_permit=False,
        updated_at=T0,
    )
    alpha.factions = [SystemFaction(name=n) for n in ("Hutton Orbital Truckers", "Mother Gaia")]
    achenar = System(
        name="Achenar",
        allegiance="empire",
        government="dictatorship",
        power="arissa lavigny-duval",
        power_state="controlled",
        needs_permit=True,
        updated_at=T0,
    )

    gaia = Faction(name="Mother Gaia", allegiance="federation", government="democracy", updated_at=T0)
    gaia.presence = [
        _presence("Sol", 0.6, "boom", active=["boom"], pending=["expansion"]),
        _presence("Alpha Centauri", 0.2, "none", recovering=["war"]),
    ]
    workers = Faction(name="Sol Workers' Party", allegiance="federation", government="cooperative", updated_at=T0)
    workers.presence = [_presence("Sol", 0.3, "election", active=["election"])]
    truckers = Faction(
        name="Hutton Orbital Truckers", allegiance="independent", government="cooperative", updated_at=T0
    )
    truckers.presence = [
        _presence("Alpha Centauri", 0.8, "none"),
        _presence("Lost System", 0.1, "none"),
    ]

    async with sessions() as session:
        session.add_all([sol, alpha, achenar, gaia, workers, truckers])
        await session.flush()
        for presence in gaia.presence + workers.presence:
            if presence.system_name_lower == "sol":
                presence.system_id = sol.id
            elif presence.system_name_lower == "alpha centauri":
                presence.system_id = alpha.id

        lincoln = _station(
            "Abraham Lincoln",
            "Sol",
            (("Dock", "Refuel", "Repair"), ("Sidewinder", "Anaconda"), ("Gold", "Silver")),
            ("128064037", "128049250"),
            type="orbis",
            economy="refinery",
            allegiance="federation",
            government="democracy",
            state="boom",
            distance_from_star=506.0,
            max_landing_pad_size="l",
            is_planetary=False,
            controlling_minor_faction="mother gaia",
            controlling_minor_faction_id=gaia.id,
            system_id=sol.id,
            has_market=True,
            has_refuel=True,
            has_repair=True,
            has_rearm=True,
            has_outfitting=True,
            has_shipyard=True,
        )
        daedalus = _station(
            "Daedalus",
            "Sol",
            (("Dock",), ("Sidewinder",), ("Gold",)),
            ("128064037",),
            type="orbis",
            economy="refinery",
            distance_from_star=1000.0,
            max_landing_pad_size="l",
            is_planetary=False,
            controlling_minor_faction="sol workers' party",
            controlling_minor_faction_id=workers.id,
            system_id=sol.id,
            has_blackmarket=True,
        )
        hutton = _station(
            "Hutton Orbital",
            "Alpha Centauri",
            (("Dock",), (), ("Silver",)),
            type="outpost",
            economy="extraction",
            distance_from_star=6784404.0,
            max_landing_pad_size="m",
            is_planetary=False,
            controlling_minor_faction="hutton orbital truckers",
            controlling_minor_faction_id=truckers.id,
            system_id=alpha.id,
        )
        haberlandt = _station(
            "Haberlandt Survey",
            "Achenar",
            type="crateroutpost",
            max_landing_pad_size="s",
            distance_from_star=120.0,
            is_planetary=True,
            controlling_minor_faction="achenar imperial fleet",
            system_id=achenar.id,
        )
        session.add_all([lincoln, daedalus, hutton, haberlandt])
        await session.flush()

        def faction_record(faction, system, when, influence):
            return FactionHistory(
                faction_id=faction.id,
                faction_name=faction.name,
                faction_name_lower=faction.name_lower,
                updated_at=when,
                updated_by="test",
                system=system,
                system_lower=system.lower(),
                influence=influence,
                state="none",
            )

        session.add_all(
            [
                faction_record(gaia, "Sol", T0, 0.5),
                faction_record(gaia, "Sol", T0 + DAY, 0.55),
                faction_record(gaia, "Alpha Centauri", T0 + 2 * DAY, 0.2),
                faction_record(gaia, "Barnard's Star", T0 + 3 * DAY, 0.1),
                faction_record(gaia, "Sol", T0 + 10 * DAY, 0.6),
                faction_record(workers, "Sol", T0 + DAY, 0.3),
            ]
        )
        session.add_all(
            [
                SystemHistory(
                    system_id=sol.id,
                    system_name=sol.name,
                    system_name_lower=sol.name_lower,
                    updated_at=when,
                    population=22780919531,
                    controlling_minor_faction="mother gaia",
                    factions=[
                        {"name": "Mother Gaia", "name_lower": "mother gaia"},
                        {"name": "Ghost Faction", "name_lower": "ghost faction"},
                    ],
                )
                for when in (T0, T0 + DAY)
            ]
        )
        session.add(
            StationHistory(
                station_id=lincoln.id,
                station_name=lincoln.name,
                station_name_lower=lincoln.name_lower,
                updated_at=T0 + DAY,
                state="boom",
                services=["dock"],
            )
        )

        admin = User(username="Commander", discriminator="0001", discord_id="100", access=0)
        pilot = User(
            username="pilot",
            discriminator="0002",
            discord_id="200",
            access=2,
            os_contribution=5,
            patronage_level=2,
            patronage_since=T0,
            factions=[{"name": "Mother Gaia", "name_lower": "mother gaia"}],
        )
        pilot.donations = [Donation(amount=10.0, date=T0), Donation(amount=5.0, date=T0 + 5 * DAY)]
        patron = User(
            username="patron",
            discriminator="0003",
            discord_id="300",
            access=2,
            patronage_level=1,
            patronage_since=T0 + 3 * DAY,
        )
        patron.donations = [Donation(amount=20.0, date=T0 + 2 * DAY)]
        nobody = User(username="nobody", discriminator="0004", discord_id="400", access=2)
        session.add_all([admin, pilot, patron, nobody])
        await session.commit()

        return {
            "sol": sol.id,
            "alpha": alpha.id,
            "achenar": achenar.id,
            "gaia": gaia.id,
            "workers": workers.id,
            "truckers": truckers.id,
            "lincoln": lincoln.id,
            "daedalus": daedalus.id,
            "hutton": hutton.id,
            "haberlandt": haberlandt.id,
            "admin": admin.id,
            "pilot": pilot.id,
            "patron": patron.id,
            "nobody": nobody.id,
        }


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def make_client(sessions):
    """
    Build an HTTP client acting as a given caller.

    Usage:
        async with make_client(Caller(access=0)) as client:
            response = await client.get("/api/factions")
    """

    def factory(caller: Caller | None = None) -> AsyncClient:
        app.dependency_overrides[get_session_factory] = lambda: sessions
        app.dependency_overrides[get_current_user] = lambda: caller or Caller()
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    yield factory
    app.dependency_overrides.clear()


@pytest.fixture
async def client(make_client, seeded):
    """Anonymous client over the seeded database."""
    async with make_client() as c:
        yield c


@pytest.fixture
async def admin_client(make_client, seeded):
    async with make_client(Caller(id=seeded["admin"], access=0)) as c:
        yield c
