"""Search Pagination — pure view slicing over a result list.

Invariants:
    - page is clamped to [1, total_pages]; total_pages is at least 1
    - Pagination never reorders or filters results
"""

from dataclasses import dataclass
from math import ceil

from goggles.core.content_record import ContentRecord
from goggles.core.domain_types import RESULTS_PAGE_SIZE


@dataclass(frozen=True)
class ResultPage:
    items: tuple[ContentRecord, ...]
    page: int
    total_pages: int
    total_results: int


def total_pages(count: int, page_size: int = RESULTS_PAGE_SIZE) -> int:
    return max(1, ceil(count / page_size))


def clamp_page(page: int, count: int, page_size: int = RESULTS_PAGE_SIZE) -> int:
    return min(max(1, page), total_pages(count, page_size))


def paginate(
    results: tuple[ContentRecord, ...] | list[ContentRecord],
    page: int,
    page_size: int = RESULTS_PAGE_SIZE,
) -> ResultPage:
    count = len(results)
    current = clamp_page(page, count, page_size)
    start = (current - 1) * page_size
    return ResultPage(
        items=tuple(results[start:start + page_size]),
        page=current,
        total_pages=total_pages(count, page_size),
        total_results=count,
    )
