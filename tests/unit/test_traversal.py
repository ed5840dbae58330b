"""
Full traversals: replaying next-page descriptors until has_next is False
must visit every record exactly once, in order.
"""

import pytest

from pagantic import MemoryCapability, Page, Paginator

SIZES = [0, 1, 5, 6, 7]
LIMITS = [1, 2, 3, 6]


def build_paginator(records, model):
    return Paginator(lambda: MemoryCapability(records, model))


@pytest.mark.unit
@pytest.mark.parametrize("size", SIZES)
@pytest.mark.parametrize("limit", LIMITS)
class TestTraversal:
    def test_offset_pages_concatenate_to_full_result(
        self, size, limit, project_factory, project_model
    ):
        """Test offset pages visit every record once, in order."""
        records = project_factory(size)
        paginator = build_paginator(records, project_model)

        pages = list(paginator.iter_pages(Page(ordering_field="id", limit=limit)))
        seen = [r.id for items, _ in pages for r in items]

        assert seen == [r.id for r in records]
        assert {next_page.count for _, next_page in pages} == {size}
        assert all(len(items) <= limit for items, _ in pages)

    def test_cursor_pages_concatenate_to_full_result(
        self, size, limit, project_factory, project_model
    ):
        """Test cursor pages visit every record once, in order."""
        records = project_factory(size)
        paginator = build_paginator(records, project_model)

        pages = list(paginator.iter_pages(Page.cursor_page("id", limit=limit)))
        seen = [r.id for items, _ in pages for r in items]

        assert seen == [r.id for r in records]
        # Each cursor strictly precedes every record of the following page
        for (_, cursor_page), (items, _) in zip(pages, pages[1:]):
            assert all(r.id > cursor_page.cursor.value for r in items)

    def test_reverse_is_exact_mirror(self, size, limit, project_factory, project_model):
        """Test a reverse traversal mirrors the forward one."""
        records = project_factory(size)
        paginator = build_paginator(records, project_model)

        for first_page in (
            Page(ordering_field="date_creation", limit=limit),
            Page.cursor_page("date_creation", limit=limit),
        ):
            forward = paginator.all(first_page)
            backward = paginator.all(
                Page(
                    ordering_field=first_page.ordering_field,
                    limit=limit,
                    mode=first_page.mode,
                    reverse=True,
                )
            )
            assert [r.id for r in backward] == [r.id for r in reversed(forward)]


@pytest.mark.unit
def test_offset_exact_multiple_needs_one_empty_fetch(project_factory, project_model):
    """Test offset mode ends an exact multiple with an empty page."""
    paginator = build_paginator(project_factory(4), project_model)

    pages = list(paginator.iter_pages(Page(ordering_field="id", limit=2)))

    assert [len(items) for items, _ in pages] == [2, 2, 0]
    assert [p.has_next for _, p in pages] == [True, True, False]


@pytest.mark.unit
def test_cursor_exact_multiple_stops_without_empty_fetch(project_factory, project_model):
    """Test cursor mode ends an exact multiple without an empty page."""
    paginator = build_paginator(project_factory(4), project_model)

    pages = list(paginator.iter_pages(Page.cursor_page("id", limit=2)))

    assert [len(items) for items, _ in pages] == [2, 2]
    assert [p.has_next for _, p in pages] == [True, False]
