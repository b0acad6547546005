"""
Paging instructions and page aggregation.

fetch_page() issues exactly one request; fetch_all() walks pages until a
short page comes back. Errors raised by the page function propagate as-is.
"""

import logging
import os
from dataclasses import dataclass
from typing import Callable, List, Optional, TypeVar

from strava_mcp.sdk.errors import InvalidPagingError
from strava_mcp.sdk.types import MAX_PAGE_SIZE

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Paging:
    """One fetch window. page_size 0 lets Strava pick its default window."""
    page: int = 1
    page_size: int = 0

    def __post_init__(self):
        if self.page < 1:
            raise InvalidPagingError(f"page must be >= 1, got {self.page}")
        if self.page_size < 0:
            raise InvalidPagingError(f"page_size must be >= 0, got {self.page_size}")


PageFn = Callable[[Paging], List[T]]


def fetch_page(paging: Optional[Paging], page_fn: PageFn) -> List[T]:
    """
    Fetch a single page.

    Without a paging instruction this is the first page in Strava's default
    window; no further pages are requested even if more exist.
    """
    if paging is None:
        paging = Paging()
    logger.debug("Fetching page %d (size %d)", paging.page, paging.page_size)
    return page_fn(paging)


def fetch_all(page_fn: PageFn, page_size: int = None) -> List[T]:
    """
    Fetch every page and concatenate them in order.

    Stops at the first page shorter than page_size. When the last page is
    exactly full, one extra (empty) page is requested.

    Args:
        page_fn: Called with Paging(1, n), Paging(2, n), ...
        page_size: Window size; defaults to STRAVA_LIST_ALL_PAGE_SIZE or the API maximum
    """
    if page_size is None:
        page_size = int(os.environ.get("STRAVA_LIST_ALL_PAGE_SIZE", MAX_PAGE_SIZE))
    if page_size < 1:
        raise InvalidPagingError(f"fetch_all needs a page_size >= 1, got {page_size}")

    results: List[T] = []
    page = 1
    while True:
        items = page_fn(Paging(page, page_size)) or []
        results.extend(items)
        if len(items) < page_size:
            break
        page += 1

    logger.debug("Fetched %d items over %d pages", len(results), page)
    return results
