"""
The contract between the paginator and a query backend.

A capability is a stateful query builder scoped to a single pagination call:
the paginator configures it (filter, order, limit, offset) and then asks it to
fetch or count. Instances must not be shared between pagination calls; hand
the Paginator a CapabilityFactory so every call starts from a fresh builder.
"""

from collections.abc import Callable, MutableSequence
from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")

# Passed to set_limit / set_offset to mean "no limit" / "no skip".
DISABLED = -1

FILTER_OPERATORS = ("=", "!=", "<", "<=", ">", ">=")


def check_operator(op: str) -> str:
    """Validates a filter operator, returning it unchanged."""
    if op not in FILTER_OPERATORS:
        raise ValueError(
            f"Unsupported filter operator '{op}', expected one of {', '.join(FILTER_OPERATORS)}"
        )
    return op


@runtime_checkable
class QueryCapability(Protocol[T]):
    """Operations the paginator needs from a query backend."""

    record_type: type[T] | None

    def add_filter(self, field: str, op: str, value: Any) -> None:
        """Adds a predicate, combined with previous filters using AND."""
        ...

    def set_order(self, field: str, descending: bool = False) -> None:
        """Sets (or overrides) the sort order."""
        ...

    def set_limit(self, limit: int) -> None:
        """Sets the maximum number of records to fetch. DISABLED means unlimited."""
        ...

    def set_offset(self, offset: int) -> None:
        """Sets the number of records to skip. DISABLED means none."""
        ...

    def fetch(self, destination: MutableSequence[T]) -> None:
        """Executes the query, appending matching records to `destination` in order."""
        ...

    def count(self) -> int:
        """Counts records matching the filters, ignoring limit and offset."""
        ...


CapabilityFactory = Callable[[], QueryCapability[T]]
