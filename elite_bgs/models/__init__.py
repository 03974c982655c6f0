from elite_bgs.models.faction import Faction, FactionPresence, PresenceState
from elite_bgs.models.history import FactionHistory, StationHistory, SystemHistory
from elite_bgs.models.station import (
    Station,
    StationCommodity,
    StationModule,
    StationService,
    StationShip,
)
from elite_bgs.models.system import System, SystemFaction
from elite_bgs.models.user import Donation, User

__all__ = [
    "Faction", "FactionPresence", "PresenceState",
    "System", "SystemFaction",
    "Station", "StationService", "StationShip", "StationCommodity", "StationModule",
    "FactionHistory", "SystemHistory", "StationHistory",
    "User", "Donation",
]
