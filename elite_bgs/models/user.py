import uuid

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from elite_bgs.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    discord_id = Column(String(50), nullable=True, unique=True)
    username = Column(String(100), nullable=False)
    discriminator = Column(String(10), nullable=False)
    avatar = Column(String(500), nullable=True)
    access = Column(Integer, nullable=False, default=2)  # 0 = admin
    os_contribution = Column(Integer, nullable=True)
    patronage_level = Column(Integer, nullable=True)
    patronage_since = Column(DateTime(timezone=True), nullable=True)

    # [{"name": ..., "name_lower": ...}]
    factions = Column(JSON, nullable=True)
    systems = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    donations = relationship(
        "Donation",
        back_populates="user",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="Donation.date",
    )


class Donation(Base):
    __tablename__ = "donations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount = Column(Float, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)

    # Relationships
    user = relationship("User", back_populates="donations")
