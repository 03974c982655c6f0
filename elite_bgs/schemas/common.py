from typing import Generic, Literal, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

# Outcome of resolving a by-name reference against another collection.
ReferenceStatus = Literal["resolved", "unresolved"]


class Paginated(BaseModel, Generic[T]):
    docs: list[T]
    total: int
    pages: int
    page: int
    limit: int


class StateEntry(BaseModel):
    state: str
    trend: int | None = None
