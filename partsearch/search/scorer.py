from __future__ import annotations

from dataclasses import dataclass

from partsearch.schemas import SEARCHABLE_FIELDS, FieldMatch, InventoryRecord, SearchConfiguration
from partsearch.search.matcher import match


@dataclass(frozen=True)
class RecordScore:
    score: float
    matches: tuple[FieldMatch, ...]


def score_record(query: str, record: InventoryRecord, config: SearchConfiguration) -> RecordScore | None:
    """Weighted score over the fields that matched; None when no field matched.

    Only matching fields enter the weighted average, so a record matching just the
    lighter field is not penalised for the field it missed.
    """
    weighted_sum = 0.0
    matched_weight = 0.0
    matches: list[FieldMatch] = []
    for field in SEARCHABLE_FIELDS:
        weight = config.field_weights.get(field, 0.0)
        if weight <= 0.0:
            continue
        value = getattr(record, field)
        result = match(query, value, config)
        if result is None:
            continue
        weighted_sum += result.score * weight
        matched_weight += weight
        matches.append(FieldMatch(field=field, value=value, spans=result.spans))

    if not matches:
        return None
    return RecordScore(score=weighted_sum / matched_weight, matches=tuple(matches))
