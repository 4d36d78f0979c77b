from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from partsearch.schemas import Page, ScoredCandidate


def filter_by_year(candidates: Iterable[ScoredCandidate], target_year: int) -> list[ScoredCandidate]:
    return [c for c in candidates if c.record.year_from <= target_year <= c.record.year_to]


def paginate(
    candidates: Sequence[ScoredCandidate],
    page: int,
    limit: int,
    max_limit: int,
    total: int | None = None,
) -> Page:
    """Slice one page out of ranked candidates.

    ``total`` defaults to ``len(candidates)``; pass the pre-cap match count when the
    candidates were truncated by the ranker. Pages past the end are empty.
    """
    if page < 1:
        raise ValueError("page must be >= 1")
    if limit < 1 or max_limit < 1:
        raise ValueError("limit must be >= 1")

    limit = min(limit, max_limit)
    total = len(candidates) if total is None else total
    start = (page - 1) * limit
    items = tuple(candidates[start:start + limit])
    return Page(
        items=items,
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit) if total else 0,
    )
