"""
In-process QueryCapability over a list of records.

Useful as a reference backend, in tests, and for paginating data that is
already in memory (e.g. results of an upstream API call).
"""

import operator
from collections.abc import Callable, Iterable, MutableSequence
from typing import Any, Generic, TypeVar

from ._logging import logger
from .capability import DISABLED, check_operator
from .sequence import read_field, validate_field

T = TypeVar("T")

_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "=": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


class MemoryCapability(Generic[T]):
    """
    Filters, orders and slices a list of records held in memory.

    The source records are never modified; fetch() appends the selected
    records (not copies) to the destination.
    """

    def __init__(self, records: Iterable[T], record_type: type[T] | None = None) -> None:
        self.records = list(records)
        self.record_type = record_type

        # Pending query state
        self.filters: list[tuple[str, str, Any]] = []
        self.order_field: str | None = None
        self.descending = False
        self.limit_val: int | None = None
        self.offset_val: int | None = None

    def add_filter(self, field: str, op: str, value: Any) -> None:
        check_operator(op)
        validate_field(self.record_type, field)
        self.filters.append((field, op, value))

    def set_order(self, field: str, descending: bool = False) -> None:
        validate_field(self.record_type, field)
        self.order_field = field
        self.descending = descending

    def set_limit(self, limit: int) -> None:
        self.limit_val = None if limit == DISABLED else limit

    def set_offset(self, offset: int) -> None:
        self.offset_val = None if offset == DISABLED else offset

    def _matching(self) -> list[T]:
        return [
            record
            for record in self.records
            if all(_OPERATORS[op](read_field(record, f), v) for f, op, v in self.filters)
        ]

    def fetch(self, destination: MutableSequence[T]) -> None:
        selected = self._matching()

        if self.order_field is not None:
            order_field = self.order_field
            selected.sort(key=lambda r: read_field(r, order_field), reverse=self.descending)

        start = self.offset_val or 0
        stop = None if self.limit_val is None else start + self.limit_val
        page = selected[start:stop]

        logger.debug(
            "Fetched records from memory",
            extra={
                "source_size": len(self.records),
                "has_filter": bool(self.filters),
                "limit": self.limit_val,
                "offset": self.offset_val,
                "result_count": len(page),
            },
        )
        destination.extend(page)

    def count(self) -> int:
        return len(self._matching())
