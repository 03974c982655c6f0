import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from elite_bgs.schemas.common import ReferenceStatus
from elite_bgs.schemas.system import SystemSummary


class StationHistoryView(BaseModel):
    id: uuid.UUID
    updated_at: datetime
    updated_by: str | None = None
    government: str | None = None
    allegiance: str | None = None
    state: str | None = None
    controlling_minor_faction: str | None = None
    services: list[Any] = []


class StationView(BaseModel):
    id: uuid.UUID
    eddb_id: int | None = None
    name: str
    name_lower: str
    type: str | None = None
    system: str | None = None
    system_lower: str | None = None
    system_id: uuid.UUID | None = None
    government: str | None = None
    economy: str | None = None
    allegiance: str | None = None
    state: str | None = None
    distance_from_star: float | None = None
    max_landing_pad_size: str | None = None
    is_planetary: bool | None = None
    controlling_minor_faction: str | None = None
    controlling_minor_faction_id: uuid.UUID | None = None
    has_blackmarket: bool | None = None
    has_market: bool | None = None
    has_refuel: bool | None = None
    has_repair: bool | None = None
    has_rearm: bool | None = None
    has_outfitting: bool | None = None
    has_shipyard: bool | None = None
    services: list[str] = []
    selling_ships: list[str] = []
    export_commodities: list[str] = []
    selling_modules: list[str] = []
    updated_at: datetime | None = None
    system_status: ReferenceStatus | None = None
    system_details: SystemSummary | None = None
    history: list[StationHistoryView] | None = None
    history_error: str | None = None
