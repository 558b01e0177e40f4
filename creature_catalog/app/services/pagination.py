"""
Pagination policy for creature listings.

Turns an optional ``limit``/``offset`` pair into a bounded query
description.  Listings are always ordered by ``no`` ascending; since
``no`` is unique the order is total and pages never overlap.
"""

from dataclasses import dataclass
from typing import Optional

SORT_KEY = "no"


@dataclass(frozen=True)
class PageRequest:
    """A single page of the catalog.

    ``limit == 0`` means no limit, following the document-store
    convention.
    """

    limit: int
    offset: int = 0
    sort_key: str = SORT_KEY

    @property
    def unbounded(self) -> bool:
        return self.limit == 0


class PaginationPolicy:
    """Apply the configured default page size to listing requests."""

    def __init__(self, default_limit: int) -> None:
        if default_limit < 0:
            raise ValueError("default_limit must be >= 0")
        self.default_limit = default_limit

    def page(self, limit: Optional[int] = None, offset: Optional[int] = None) -> PageRequest:
        limit = self.default_limit if limit is None else limit
        offset = 0 if offset is None else offset
        if limit < 0:
            raise ValueError("limit must be >= 0")
        if offset < 0:
            raise ValueError("offset must be >= 0")
        return PageRequest(limit=limit, offset=offset)
