"""
Page descriptors for Pagantic.

A Page describes the page a caller wants and, once returned by the paginator,
the page that comes after it. Descriptors are frozen: the paginator derives
the next one with dataclasses.replace, so a descriptor handed back to the
caller can be stored, serialized or replayed without surprises.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .exceptions import InvalidPageError


class PageMode(Enum):
    """Navigation strategy of a page descriptor."""

    OFFSET = "offset"
    CURSOR = "cursor"


@dataclass(frozen=True)
class Cursor:
    """
    Seek position for cursor mode.

    Attributes:
        value: Ordering value of the last record of the previous page.
               None on the first page.
        field_name: Record field read to compute the next value. Defaults to
                    the page's ordering field when not set.
    """

    value: Any = None
    field_name: str | None = None


@dataclass(frozen=True)
class Page:
    """
    Request/response descriptor for one page of results.

    Attributes:
        ordering_field: Field used to order results (and to seek in cursor mode)
        limit: Requested page size
        mode: OFFSET or CURSOR
        reverse: Order descending instead of ascending
        offset: Number of records to skip (offset mode only)
        cursor: Seek position (cursor mode only)
        count: Total matching records, filled by the paginator (offset mode only)
        has_next: Whether another page exists, filled by the paginator
    """

    ordering_field: str
    limit: int
    mode: PageMode = PageMode.OFFSET
    reverse: bool = False
    offset: int = 0
    cursor: Cursor = field(default_factory=Cursor)
    count: int = 0
    has_next: bool = False

    def __post_init__(self) -> None:
        if not self.ordering_field:
            raise InvalidPageError("ordering_field must not be empty")
        if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit < 1:
            raise InvalidPageError(f"limit must be a positive integer, got {self.limit!r}")
        if isinstance(self.offset, bool) or not isinstance(self.offset, int) or self.offset < 0:
            raise InvalidPageError(f"offset must be a non-negative integer, got {self.offset!r}")

    @classmethod
    def offset_page(cls, ordering_field: str, limit: int, reverse: bool = False) -> "Page":
        """Builds the first page descriptor of an offset pagination."""
        return cls(ordering_field=ordering_field, limit=limit, reverse=reverse)

    @classmethod
    def cursor_page(
        cls,
        ordering_field: str,
        limit: int,
        field_name: str | None = None,
        reverse: bool = False,
    ) -> "Page":
        """Builds the first page descriptor of a cursor pagination."""
        return cls(
            ordering_field=ordering_field,
            limit=limit,
            mode=PageMode.CURSOR,
            reverse=reverse,
            cursor=Cursor(field_name=field_name),
        )

    @property
    def cursor_field(self) -> str:
        """Record field the next cursor value is read from."""
        return self.cursor.field_name or self.ordering_field

    @property
    def order_direction(self) -> str:
        return "desc" if self.reverse else "asc"

    def with_cursor_value(self, value: Any) -> "Page":
        """Returns a copy of this descriptor positioned at a new seek value."""
        return replace(self, cursor=replace(self.cursor, value=value))
