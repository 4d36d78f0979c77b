from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from operator import attrgetter

from partsearch.schemas import InventoryRecord, Ranking, ScoredCandidate, SearchConfiguration
from partsearch.search.scorer import score_record

logger = logging.getLogger(__name__)


def rank(
    records: Iterable[InventoryRecord],
    query: str,
    config: SearchConfiguration,
    candidate_cap: int | None = None,
) -> Ranking:
    """Score every record, drop non-matches and sort best first.

    The sort is stable, so equal scores keep store order. ``total`` counts all
    matches, the candidates themselves are cut to ``candidate_cap``.
    """
    if candidate_cap is not None and candidate_cap < 0:
        raise ValueError("candidate_cap must be >= 0")
    if not query or not query.strip():
        return Ranking(candidates=(), total=0)

    scored: list[ScoredCandidate] = []
    for record in records:
        result = score_record(query, record, config)
        if result is not None:
            scored.append(ScoredCandidate(record=record, score=result.score, matches=result.matches))
    scored.sort(key=attrgetter("score"))

    total = len(scored)
    if candidate_cap is not None:
        scored = scored[:candidate_cap]
    logger.debug("ranked query=%r matches=%d kept=%d", query, total, len(scored))
    return Ranking(candidates=tuple(scored), total=total)


def rank_and_score(
    records: Iterable[InventoryRecord],
    query: str,
    field_weights: Mapping[str, float],
    threshold: float,
    min_match_length: int,
    distance: int,
    candidate_cap: int | None = None,
) -> list[ScoredCandidate]:
    config = SearchConfiguration(
        threshold=threshold,
        min_match_length=min_match_length,
        distance=distance,
        field_weights=dict(field_weights),
    )
    return list(rank(records, query, config, candidate_cap).candidates)
