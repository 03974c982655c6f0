"""Append-only snapshots of faction, system and station state.

Rows are written by the ingestion side and never modified here. Each row
repeats the identifying fields of its owner; readers strip them.
"""
import uuid

from sqlalchemy import JSON, BigInteger, Column, DateTime, Float, String, Uuid

from elite_bgs.database import Base


class FactionHistory(Base):
    __tablename__ = "faction_history"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    faction_id = Column(Uuid, nullable=False, index=True)
    faction_name = Column(String(200), nullable=False)
    faction_name_lower = Column(String(200), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_by = Column(String(100), nullable=True)
    system = Column(String(200), nullable=False)
    system_lower = Column(String(200), nullable=False, index=True)
    system_id = Column(Uuid, nullable=True)
    state = Column(String(50), nullable=True)
    influence = Column(Float, nullable=True)
    happiness = Column(String(50), nullable=True)
    active_states = Column(JSON, nullable=False, default=list)
    pending_states = Column(JSON, nullable=False, default=list)
    recovering_states = Column(JSON, nullable=False, default=list)


class SystemHistory(Base):
    __tablename__ = "system_history"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    system_id = Column(Uuid, nullable=False, index=True)
    system_name = Column(String(200), nullable=False)
    system_name_lower = Column(String(200), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_by = Column(String(100), nullable=True)
    population = Column(BigInteger, nullable=True)
    government = Column(String(50), nullable=True)
    allegiance = Column(String(50), nullable=True)
    state = Column(String(50), nullable=True)
    security = Column(String(50), nullable=True)
    controlling_minor_faction = Column(String(200), nullable=True)
    # [{"name": ..., "name_lower": ...}]
    factions = Column(JSON, nullable=False, default=list)


class StationHistory(Base):
    __tablename__ = "station_history"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    station_id = Column(Uuid, nullable=False, index=True)
    station_name = Column(String(200), nullable=False)
    station_name_lower = Column(String(200), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_by = Column(String(100), nullable=True)
    government = Column(String(50), nullable=True)
    allegiance = Column(String(50), nullable=True)
    state = Column(String(50), nullable=True)
    controlling_minor_faction = Column(String(200), nullable=True)
    services = Column(JSON, nullable=False, default=list)
