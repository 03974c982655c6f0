"""Typed filter clauses.

A ``FilterSpec`` is an ordered conjunction of clauses. Every clause names a
logical field; ``elite_bgs.query.compiler`` maps those names onto columns of
the entity being searched.
"""
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Equals:
    field: str
    value: Any


@dataclass(frozen=True)
class AnyOf:
    """Field value is one of ``values``. For list fields: any element matches."""

    field: str
    values: tuple[Any, ...]


@dataclass(frozen=True)
class AllOf:
    """Every one of ``values`` is present in the list field."""

    field: str
    values: tuple[Any, ...]


@dataclass(frozen=True)
class Prefix:
    """Field starts with ``prefix``, matched literally."""

    field: str
    prefix: str


@dataclass(frozen=True)
class AtLeast:
    """Field is ``minimum`` or anything after it on the ordered ``scale``."""

    field: str
    minimum: str
    scale: tuple[str, ...]


@dataclass(frozen=True)
class LessThan:
    field: str
    value: Any


Clause = Equals | AnyOf | AllOf | Prefix | AtLeast | LessThan


def one_or_any(field_name: str, values: Iterable[Any]) -> Equals | AnyOf:
    """Equality for a single value, inclusion for several."""
    values = tuple(values)
    if len(values) == 1:
        return Equals(field_name, values[0])
    return AnyOf(field_name, values)


@dataclass
class FilterSpec:
    clauses: list[Clause] = field(default_factory=list)

    def add(self, clause: Clause) -> "FilterSpec":
        self.clauses.append(clause)
        return self

    def extend(self, clauses: Iterable[Clause]) -> "FilterSpec":
        self.clauses.extend(clauses)
        return self

    def fields(self) -> set[str]:
        return {clause.field for clause in self.clauses}

    def is_empty(self) -> bool:
        return not self.clauses

    def __iter__(self) -> Iterator[Clause]:
        return iter(self.clauses)

    def __len__(self) -> int:
        return len(self.clauses)
