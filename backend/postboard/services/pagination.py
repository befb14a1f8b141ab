"""Offset pagination shared by the list operations of every service."""

from typing import Any, Callable, Iterable, Optional, Tuple

from postboard.schemas.common import Page, PageMeta

DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0


def resolve_window(limit: Optional[int], offset: Optional[int]) -> Tuple[int, int]:
    """Apply defaults (10 / 0) for whichever of limit/offset the caller omitted."""
    return (
        DEFAULT_LIMIT if limit is None else limit,
        DEFAULT_OFFSET if offset is None else offset,
    )


def build_page(
    rows: Iterable[Any],
    total: int,
    limit: int,
    offset: int,
    serialize: Callable[[Any], Any],
) -> Page:
    """
    Assemble a Page from one window of rows and the unfiltered-by-window count.

    hasMore is computed from the requested window, not from the number of rows
    returned: `offset + limit < total`.
    """
    return Page(
        data=[serialize(row) for row in rows],
        meta=PageMeta(
            total=total,
            limit=limit,
            offset=offset,
            has_more=offset + limit < total,
        ),
    )
