from collections.abc import Iterable
from typing import Any


def column_values(row: Any, exclude: Iterable[str] = ()) -> dict[str, Any]:
    """Mapped column values of an ORM row, keyed by attribute name."""
    excluded = set(exclude)
    return {
        column.key: getattr(row, column.key)
        for column in row.__table__.columns
        if column.key not in excluded
    }
