import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class NamedEntry(BaseModel):
    name: str
    name_lower: str


class DonationResponse(BaseModel):
    amount: float
    date: datetime

    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    id: uuid.UUID
    discord_id: str | None = None
    username: str
    discriminator: str
    avatar: str | None = None
    access: int
    os_contribution: int | None = None
    patronage_level: int | None = None
    patronage_since: datetime | None = None
    factions: list[NamedEntry] | None = None
    systems: list[NamedEntry] | None = None
    donations: list[DonationResponse] = []
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class UserUpdate(BaseModel):
    """Profile update. An explicit ``null`` clears the field."""

    id: uuid.UUID
    username: str
    discriminator: str
    access: int
    avatar: str | None = None
    os_contribution: int | None = None
    patronage_level: int | None = None
    patronage_since: datetime | None = None
    factions: list[NamedEntry] | None = None
    systems: list[NamedEntry] | None = None


class DonorEntry(BaseModel):
    username: str
    amount: float
    date: datetime


class PatronEntry(BaseModel):
    username: str
    level: int
    since: datetime | None = None


class CreditEntry(BaseModel):
    username: str
    avatar: str | None = None
    discord_id: str | None = None
    os_contribution: int | None = None
    level: int | None = None
