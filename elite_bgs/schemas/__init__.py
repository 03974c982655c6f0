from elite_bgs.schemas.admin import ScriptRunRequest
from elite_bgs.schemas.common import Paginated, ReferenceStatus, StateEntry
from elite_bgs.schemas.faction import FactionHistoryView, FactionPresenceView, FactionView
from elite_bgs.schemas.station import StationHistoryView, StationView
from elite_bgs.schemas.system import (
    FactionHistoryInSystem,
    FactionSummary,
    HistoryFactionReference,
    SystemFactionView,
    SystemHistoryView,
    SystemSummary,
    SystemView,
)
from elite_bgs.schemas.user import (
    CreditEntry,
    DonationResponse,
    DonorEntry,
    NamedEntry,
    PatronEntry,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "ScriptRunRequest", "Paginated", "ReferenceStatus", "StateEntry",
    "FactionView", "FactionPresenceView", "FactionHistoryView",
    "SystemView", "SystemSummary", "FactionSummary", "SystemFactionView",
    "SystemHistoryView", "HistoryFactionReference", "FactionHistoryInSystem",
    "StationView", "StationHistoryView",
    "UserResponse", "UserUpdate", "NamedEntry", "DonationResponse",
    "DonorEntry", "PatronEntry", "CreditEntry",
]
