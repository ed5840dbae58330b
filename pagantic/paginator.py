"""
Offset and cursor pagination over any QueryCapability.

The paginator drives a capability through a fixed sequence of calls:

    offset mode:  set_order -> set_limit -> set_offset -> fetch
                  -> set_limit(DISABLED) -> set_offset(DISABLED) -> count
    cursor mode:  [add_filter] -> set_order -> set_limit(limit + 1) -> fetch

and derives the next Page descriptor from what landed in the destination.
Backend errors propagate unchanged; when paginate raises, there is no next
page to act on.
"""

from collections.abc import Iterator, MutableSequence
from dataclasses import replace
from typing import Any, Generic, TypeVar

from . import sequence
from ._logging import logger, redact_value
from .capability import DISABLED, CapabilityFactory, QueryCapability
from .exceptions import NullCursorError, UnknownModeError
from .page import Page, PageMode

T = TypeVar("T")


def paginate(
    capability: QueryCapability[T], page: Page, destination: MutableSequence[T]
) -> Page:
    """
    Fetches one page into `destination` and returns the descriptor of the next page.

    Args:
        capability: A fresh query builder, used for this call only
        page: Descriptor of the page to fetch
        destination: Empty mutable sequence that receives the records

    Returns:
        The next page descriptor. `has_next` tells whether it is worth fetching.

    Raises:
        UnknownModeError: If page.mode is neither OFFSET nor CURSOR
        NotASequenceError: If destination is not a mutable sequence
        DestinationNotEmptyError: If destination already holds records
        UnknownFieldError: If the cursor field is not declared on the record type
        NullCursorError: If more records follow but the last record has no cursor value
        Any error raised by the capability's fetch() or count()
    """
    sequence.validate_destination(destination)

    if page.mode is PageMode.OFFSET:
        return _paginate_offset(capability, page, destination)
    if page.mode is PageMode.CURSOR:
        sequence.validate_field(getattr(capability, "record_type", None), page.cursor_field)
        return _paginate_cursor(capability, page, destination)
    raise UnknownModeError(page.mode)


def _paginate_offset(
    capability: QueryCapability[T], page: Page, destination: MutableSequence[T]
) -> Page:
    logger.debug(
        "Paginating by offset",
        extra={
            "ordering_field": page.ordering_field,
            "order": page.order_direction,
            "limit": page.limit,
            "offset": page.offset,
        },
    )

    capability.set_order(page.ordering_field, descending=page.reverse)
    capability.set_limit(page.limit)
    capability.set_offset(page.offset)
    capability.fetch(destination)

    # Exactly `limit` records means "maybe more": the caller may need one
    # extra (empty) fetch to learn that the data ended on a page boundary.
    has_next = sequence.length(destination) == page.limit

    capability.set_limit(DISABLED)
    capability.set_offset(DISABLED)
    total = capability.count()

    return replace(page, offset=page.offset + page.limit, has_next=has_next, count=total)


def _paginate_cursor(
    capability: QueryCapability[T], page: Page, destination: MutableSequence[T]
) -> Page:
    logger.debug(
        "Paginating by cursor",
        extra={
            "ordering_field": page.ordering_field,
            "order": page.order_direction,
            "limit": page.limit,
            "has_cursor": page.cursor.value is not None,
            "cursor_hash": redact_value(page.cursor.value),
        },
    )

    if page.cursor.value is not None:
        op = "<" if page.reverse else ">"
        capability.add_filter(page.ordering_field, op, page.cursor.value)

    capability.set_order(page.ordering_field, descending=page.reverse)
    # One extra record tells us whether a next page exists without a count query
    capability.set_limit(page.limit + 1)
    capability.fetch(destination)

    has_next = sequence.length(destination) == page.limit + 1
    if has_next:
        sequence.pop_last(destination)

    next_value = sequence.last_field_value(destination, page.cursor_field)
    # A None seek value would restart from the first page
    if has_next and next_value is None:
        raise NullCursorError(page.cursor_field)
    return replace(page.with_cursor_value(next_value), has_next=has_next)


class Paginator(Generic[T]):
    """
    Binds pagination to a capability factory.

    Every call builds a fresh capability, so pending query state never leaks
    from one page fetch into the next.

    Usage:
        paginator = Paginator(lambda: MemoryCapability(projects, Project))
        items, next_page = paginator.paginate(Page.cursor_page("id", limit=20))
        if next_page.has_next:
            items, next_page = paginator.paginate(next_page)
    """

    def __init__(self, capability_factory: CapabilityFactory[T]) -> None:
        self.capability_factory = capability_factory

    def paginate(
        self, page: Page, destination: MutableSequence[T] | None = None
    ) -> tuple[MutableSequence[T], Page]:
        """
        Fetches one page. Returns the records and the next page descriptor.

        `destination`, when given, must be empty.
        """
        items: MutableSequence[T] = [] if destination is None else destination
        next_page = paginate(self.capability_factory(), page, items)
        return items, next_page

    def iter_pages(self, page: Page) -> Iterator[tuple[MutableSequence[T], Page]]:
        """
        Yields (records, next_page) for every page, starting at `page`.

        Stops after the first page whose descriptor reports has_next=False.
        """
        current: Page | None = page
        while current is not None:
            items, next_page = self.paginate(current)
            yield items, next_page
            current = next_page if next_page.has_next else None

    def all(self, page: Page) -> list[T]:
        """
        Collects the records of every page into a single list.
        WARNING: Can consume high memory for large datasets.
        """
        records: list[Any] = []
        for items, _ in self.iter_pages(page):
            records.extend(items)
        return records
