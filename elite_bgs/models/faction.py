import uuid

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship, validates

from elite_bgs.database import Base


class Faction(Base):
    __tablename__ = "factions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    eddb_id = Column(Integer, nullable=True, index=True)
    name = Column(String(200), nullable=False)
    name_lower = Column(String(200), nullable=False, index=True)
    allegiance = Column(String(50), nullable=True)
    government = Column(String(50), nullable=True)
    home_system_name = Column(String(200), nullable=True)
    is_player_faction = Column(Boolean, default=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    presence = relationship(
        "FactionPresence",
        back_populates="faction",
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    @validates("name")
    def _sync_name_lower(self, key, value):
        self.name_lower = value.lower()
        return value


class FactionPresence(Base):
    """A faction's standing in one system. The system is referenced by name."""

    __tablename__ = "faction_presence"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    faction_id = Column(
        Uuid,
        ForeignKey("factions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    system_id = Column(Uuid, nullable=True)
    system_name = Column(String(200), nullable=False)
    system_name_lower = Column(String(200), nullable=False, index=True)
    influence = Column(Float, nullable=True)
    state = Column(String(50), nullable=True)
    happiness = Column(String(50), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    faction = relationship("Faction", back_populates="presence")
    states = relationship(
        "PresenceState",
        back_populates="presence",
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    @validates("system_name")
    def _sync_system_name_lower(self, key, value):
        self.system_name_lower = value.lower()
        return value


class PresenceState(Base):
    __tablename__ = "presence_states"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    presence_id = Column(
        Uuid,
        ForeignKey("faction_presence.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    kind = Column(String(12), nullable=False)  # active | pending | recovering
    state = Column(String(50), nullable=False)
    trend = Column(Integer, nullable=True)

    # Relationships
    presence = relationship("FactionPresence", back_populates="states")
