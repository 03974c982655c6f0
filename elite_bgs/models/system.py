import uuid

from sqlalchemy import BigInteger, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship, validates

from elite_bgs.database import Base


class System(Base):
    __tablename__ = "systems"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    eddb_id = Column(Integer, nullable=True, index=True)
    name = Column(String(200), nullable=False)
    name_lower = Column(String(200), nullable=False, index=True)
    allegiance = Column(String(50), nullable=True)
    government = Column(String(50), nullable=True)
    state = Column(String(50), nullable=True)
    primary_economy = Column(String(50), nullable=True)
    secondary_economy = Column(String(50), nullable=True)
    security = Column(String(50), nullable=True)
    population = Column(BigInteger, nullable=True)
    controlling_minor_faction = Column(String(200), nullable=True)  # lower-case faction name
    power = Column(String(100), nullable=True)
    power_state = Column(String(50), nullable=True)
    needs_permit = Column(Boolean, default=False)
    x = Column(Float, nullable=True)
    y = Column(Float, nullable=True)
    z = Column(Float, nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    factions = relationship(
        "SystemFaction",
        back_populates="system",
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    @validates("name")
    def _sync_name_lower(self, key, value):
        self.name_lower = value.lower()
        return value


class SystemFaction(Base):
    """A faction present in a system, referenced by name and resolved when read."""

    __tablename__ = "system_factions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    system_id = Column(
        Uuid,
        ForeignKey("systems.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(200), nullable=False)
    name_lower = Column(String(200), nullable=False, index=True)

    # Relationships
    system = relationship("System", back_populates="factions")

    @validates("name")
    def _sync_name_lower(self, key, value):
        self.name_lower = value.lower()
        return value
