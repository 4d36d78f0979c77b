"""Approximate matching of a query against one text field.

Every whitespace-separated query token is aligned against the best substring of
the field (semi-global Levenshtein alignment). A token's cost is its edit
distance divided by its length, plus a location penalty when the alignment
starts more than ``distance`` characters into the field. Costs are capped at 1.0
and a token matches when its cost is within the configured threshold.

A multi-token query matches a field when at least one token does. The field
score averages the token costs, counting each failed token at the threshold,
so the score never exceeds the threshold and full matches outrank partial ones.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from partsearch.schemas import SearchConfiguration
from partsearch.search.text import fold


@dataclass(frozen=True)
class MatchResult:
    score: float
    spans: tuple[tuple[int, int], ...] = ()


@dataclass(frozen=True)
class _Alignment:
    cost: float
    start: int
    end: int


def location_penalty(start: int, config: SearchConfiguration) -> float:
    if config.ignore_location or start <= config.distance:
        return 0.0
    return min(1.0, (start - config.distance) / (config.distance + 1))


def match(query: str, text: str, config: SearchConfiguration) -> MatchResult | None:
    tokens = (query or "").split()
    if not tokens or not text:
        return None

    folded_text, offsets = fold(text)
    costs: list[float] = []
    spans: list[tuple[int, int]] = []
    for token in tokens:
        folded_token = fold(token)[0]
        if len(folded_token) < config.min_match_length:
            continue
        alignment = align_token(folded_token, folded_text, config)
        if alignment is None:
            continue
        costs.append(alignment.cost)
        if alignment.end > alignment.start:
            spans.append((offsets[alignment.start], offsets[alignment.end - 1] + 1))

    if not costs:
        return None
    missed = len(tokens) - len(costs)
    score = (sum(costs) + missed * config.threshold) / len(tokens)
    return MatchResult(score=min(score, config.threshold), spans=_merge_spans(spans))


def align_token(token: str, text: str, config: SearchConfiguration) -> _Alignment | None:
    """Best alignment of an already folded token inside folded text, or None above threshold."""
    size = len(token)
    if size == 0 or not text:
        return None

    exact = text.find(token)
    if exact >= 0 and location_penalty(exact, config) == 0.0:
        return _Alignment(cost=0.0, start=exact, end=exact + size)

    # Characters of the token that the text lacks entirely each cost at least one edit.
    missing = sum((Counter(token) - Counter(text)).values())
    if missing / size > config.threshold:
        return None

    # Starts within the free window share one pass. Past it every start carries
    # its own penalty, so each one still under the threshold gets its own pass.
    last_index = len(text) - 1
    if config.ignore_location:
        windows = [(0, last_index)]
    else:
        windows = [(0, min(config.distance, last_index))]
        horizon = config.distance + config.threshold * (config.distance + 1)
        windows.extend((start, start) for start in range(config.distance + 1, min(last_index, int(horizon)) + 1))

    best: _Alignment | None = None
    for first, last in windows:
        found = _fewest_edits(token, text, first, last)
        if found is None:
            continue
        errors, start, end = found
        cost = min(1.0, errors / size + location_penalty(start, config))
        if best is None or cost < best.cost:
            best = _Alignment(cost=cost, start=start, end=end)

    if best is None or best.cost > config.threshold:
        return None
    return best


def _fewest_edits(token: str, text: str, first: int, last: int) -> tuple[int, int, int] | None:
    """(errors, start, end) of the cheapest alignment starting in [first, last]."""
    # Cells pack (errors, start) as errors * stride + start so min() prefers
    # fewer errors, then the earlier start. Disallowed starts begin at blocked.
    stride = len(text) + 1
    blocked = (len(token) + stride + 1) * stride
    previous = [column if first <= column <= last else blocked for column in range(stride)]
    for row, char in enumerate(token, start=1):
        current = [row * stride if first == 0 else blocked]
        for column in range(1, stride):
            substitution = previous[column - 1] + (0 if text[column - 1] == char else stride)
            current.append(min(substitution, previous[column] + stride, current[column - 1] + stride))
        previous = current

    found: tuple[int, int, int] | None = None
    lowest = blocked
    for end in range(1, stride):
        if previous[end] >= lowest:
            continue
        errors, start = divmod(previous[end], stride)
        if start >= end:
            continue
        lowest = previous[end]
        found = (errors, start, end)
    return found


def _merge_spans(spans: list[tuple[int, int]]) -> tuple[tuple[int, int], ...]:
    merged: list[tuple[int, int]] = []
    for start, end in sorted(spans):
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return tuple(merged)
