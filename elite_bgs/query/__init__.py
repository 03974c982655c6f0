"""Translation of request parameters into storage filters."""
from elite_bgs.query.filters import AllOf, AnyOf, AtLeast, Clause, Equals, FilterSpec, LessThan, Prefix

__all__ = ["AllOf", "AnyOf", "AtLeast", "Clause", "Equals", "FilterSpec", "LessThan", "Prefix"]
