import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from elite_bgs.schemas.common import ReferenceStatus, StateEntry


class SystemSummary(BaseModel):
    """System fields attached to other entities on request."""

    id: uuid.UUID
    eddb_id: int | None = None
    name: str
    name_lower: str
    allegiance: str | None = None
    government: str | None = None
    state: str | None = None
    primary_economy: str | None = None
    secondary_economy: str | None = None
    security: str | None = None
    population: int | None = None
    controlling_minor_faction: str | None = None
    power: str | None = None
    power_state: str | None = None
    needs_permit: bool | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class FactionSummary(BaseModel):
    id: uuid.UUID
    eddb_id: int | None = None
    name: str
    allegiance: str | None = None
    government: str | None = None
    home_system_name: str | None = None
    is_player_faction: bool | None = None

    model_config = ConfigDict(from_attributes=True)


class SystemFactionView(BaseModel):
    name: str
    name_lower: str
    faction_id: uuid.UUID | None = None
    status: ReferenceStatus | None = None
    influence: float | None = None
    state: str | None = None
    active_states: list[StateEntry] = []
    pending_states: list[StateEntry] = []
    recovering_states: list[StateEntry] = []
    updated_at: datetime | None = None
    faction_details: FactionSummary | None = None


class HistoryFactionReference(BaseModel):
    name: str
    name_lower: str
    faction_id: uuid.UUID | None = None
    status: ReferenceStatus | None = None


class SystemHistoryView(BaseModel):
    id: uuid.UUID
    updated_at: datetime
    updated_by: str | None = None
    population: int | None = None
    government: str | None = None
    allegiance: str | None = None
    state: str | None = None
    security: str | None = None
    controlling_minor_faction: str | None = None
    factions: list[HistoryFactionReference] = []


class FactionHistoryInSystem(BaseModel):
    """A faction history record seen from the system it was recorded in."""

    id: uuid.UUID
    faction: str
    faction_name: str | None = None
    updated_at: datetime
    updated_by: str | None = None
    system: str
    system_lower: str
    influence: float | None = None
    state: str | None = None
    happiness: str | None = None
    active_states: list[dict[str, Any]] = []
    pending_states: list[dict[str, Any]] = []
    recovering_states: list[dict[str, Any]] = []


class SystemView(BaseModel):
    id: uuid.UUID
    eddb_id: int | None = None
    name: str
    name_lower: str
    allegiance: str | None = None
    government: str | None = None
    state: str | None = None
    primary_economy: str | None = None
    secondary_economy: str | None = None
    security: str | None = None
    population: int | None = None
    controlling_minor_faction: str | None = None
    power: str | None = None
    power_state: str | None = None
    needs_permit: bool | None = None
    x: float | None = None
    y: float | None = None
    z: float | None = None
    updated_at: datetime | None = None
    factions: list[SystemFactionView] = []
    history: list[SystemHistoryView] | None = None
    history_error: str | None = None
    faction_history: list[FactionHistoryInSystem] | None = None
    faction_history_error: str | None = None
