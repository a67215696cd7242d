# SPDX-License-Identifier: MIT

import math
from typing import TypeVar

T = TypeVar("T")


def count_pages(total_count: int, page_size: int) -> int:
    """Number of pages; an empty list still shows as one page of zero items."""
    if page_size < 1:
        raise ValueError(f"page size must be at least 1, got {page_size}")
    return max(1, math.ceil(total_count / page_size))


def clamp_page(page: int, total_pages: int) -> int:
    return min(max(page, 1), max(1, total_pages))


def paginate(items: list[T], page: int, page_size: int) -> tuple[list[T], int, int]:
    """
    Slice one page out of `items`.

    Returns:
        (page items, total pages, page actually returned after clamping)
    """
    total_pages = count_pages(len(items), page_size)
    page = clamp_page(page, total_pages)
    start = (page - 1) * page_size
    return items[start : start + page_size], total_pages, page
