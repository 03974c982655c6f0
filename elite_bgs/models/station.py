import uuid

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import declared_attr, relationship, validates

from elite_bgs.database import Base


class Station(Base):
    __tablename__ = "stations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    eddb_id = Column(Integer, nullable=True, index=True)
    name = Column(String(200), nullable=False)
    name_lower = Column(String(200), nullable=False, index=True)
    type = Column(String(50), nullable=True)
    system = Column(String(200), nullable=True)
    system_lower = Column(String(200), nullable=True, index=True)
    system_id = Column(Uuid, nullable=True, index=True)
    government = Column(String(50), nullable=True)
    economy = Column(String(50), nullable=True)
    allegiance = Column(String(50), nullable=True)
    state = Column(String(50), nullable=True)
    distance_from_star = Column(Float, nullable=True)
    max_landing_pad_size = Column(String(1), nullable=True)  # s | m | l
    is_planetary = Column(Boolean, default=False)
    controlling_minor_faction = Column(String(200), nullable=True)  # lower-case faction name
    controlling_minor_faction_id = Column(Uuid, nullable=True, index=True)

    has_blackmarket = Column(Boolean, default=False)
    has_market = Column(Boolean, default=False)
    has_refuel = Column(Boolean, default=False)
    has_repair = Column(Boolean, default=False)
    has_rearm = Column(Boolean, default=False)
    has_outfitting = Column(Boolean, default=False)
    has_shipyard = Column(Boolean, default=False)

    updated_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    services = relationship(
        "StationService", lazy="selectin", cascade="all, delete-orphan"
    )
    selling_ships = relationship(
        "StationShip", lazy="selectin", cascade="all, delete-orphan"
    )
    export_commodities = relationship(
        "StationCommodity", lazy="selectin", cascade="all, delete-orphan"
    )
    selling_modules = relationship(
        "StationModule", lazy="selectin", cascade="all, delete-orphan"
    )

    @validates("name")
    def _sync_name_lower(self, key, value):
        self.name_lower = value.lower()
        return value

    @validates("system")
    def _sync_system_lower(self, key, value):
        self.system_lower = value.lower() if value is not None else None
        return value


class _StationItem:
    """Columns shared by the named lists hanging off a station."""

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    name_lower = Column(String(100), nullable=False, index=True)

    @declared_attr
    def station_id(cls):
        return Column(
            Uuid,
            ForeignKey("stations.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )

    @classmethod
    def named(cls, name: str):
        return cls(name=name, name_lower=name.lower())


class StationService(_StationItem, Base):
    __tablename__ = "station_services"


class StationShip(_StationItem, Base):
    __tablename__ = "station_ships"


class StationCommodity(_StationItem, Base):
    __tablename__ = "station_commodities"


class StationModule(_StationItem, Base):
    __tablename__ = "station_modules"  # outfitting module ids
