import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from elite_bgs.schemas.common import ReferenceStatus, StateEntry
from elite_bgs.schemas.system import SystemSummary


class FactionPresenceView(BaseModel):
    system_name: str
    system_name_lower: str
    system_id: uuid.UUID | None = None
    status: ReferenceStatus | None = None
    influence: float | None = None
    state: str | None = None
    happiness: str | None = None
    active_states: list[StateEntry] = []
    pending_states: list[StateEntry] = []
    recovering_states: list[StateEntry] = []
    updated_at: datetime | None = None
    population: int | None = None
    controlling: bool | None = None
    system_details: SystemSummary | None = None


class FactionHistoryView(BaseModel):
    id: uuid.UUID
    updated_at: datetime
    updated_by: str | None = None
    system: str
    system_lower: str
    system_id: uuid.UUID | None = None
    system_status: ReferenceStatus | None = None
    state: str | None = None
    influence: float | None = None
    happiness: str | None = None
    active_states: list[dict[str, Any]] = []
    pending_states: list[dict[str, Any]] = []
    recovering_states: list[dict[str, Any]] = []


class FactionView(BaseModel):
    id: uuid.UUID
    eddb_id: int | None = None
    name: str
    name_lower: str
    allegiance: str | None = None
    government: str | None = None
    home_system_name: str | None = None
    is_player_faction: bool | None = None
    updated_at: datetime | None = None
    # Omitted from the minimal view.
    faction_presence: list[FactionPresenceView] | None = None
    history: list[FactionHistoryView] | None = None
    history_error: str | None = None
