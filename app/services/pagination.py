"""Pagination over dated rate entries."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from itertools import islice
from typing import Dict

from app.providers.schemas import DatedRates, RateMap

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10


def page_window(page: int, page_size: int) -> tuple[int, int] | None:
    """Return the ``(start, stop)`` slice bounds, or None for an invalid window."""

    if page < 1 or page_size < 1:
        return None
    start = (page - 1) * page_size
    # islice bounds cannot exceed sys.maxsize; such a window is past any real data.
    if start >= sys.maxsize:
        return None
    return start, min(start + page_size, sys.maxsize)


def paginate_entries(entries: Iterable[DatedRates], page: int, page_size: int) -> list[DatedRates]:
    """Skip ``(page - 1) * page_size`` entries and take the next ``page_size``.

    Order is the iteration order of ``entries``. A window past the end, a
    page below 1 or a page size below 1 all produce an empty list.
    """

    window = page_window(page, page_size)
    if window is None:
        return []
    start, stop = window
    return list(islice(entries, start, stop))


def paginate_rates(
    entries: Iterable[DatedRates],
    page: int = DEFAULT_PAGE,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Dict[str, RateMap]:
    """Return one page of dated rates as an insertion-ordered mapping."""

    return {date_key: rates for date_key, rates in paginate_entries(entries, page, page_size)}
