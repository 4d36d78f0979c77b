from __future__ import annotations

import logging
import time

from partsearch.config import Settings, settings
from partsearch.schemas import InventoryRecord, Page, ScoredCandidate, SearchConfiguration, SearchResult
from partsearch.search.pipeline import filter_by_year, paginate
from partsearch.search.ranker import rank
from partsearch.search.text import fold_key
from partsearch.store.record_store import RecordStore

logger = logging.getLogger(__name__)


class SearchParameterError(ValueError):
    """A search was requested without the parameters it needs."""


class SearchService:
    def __init__(self, store: RecordStore, config: Settings | None = None) -> None:
        self.store = store
        self.settings = config or settings
        self.default_limit = max(1, self.settings.default_search_limit)
        self.max_limit = max(1, self.settings.max_search_limit)
        self.cap_factor = max(1, self.settings.year_filter_cap_factor)
        self.base_config = SearchConfiguration(
            threshold=self.settings.search_threshold,
            min_match_length=self.settings.search_min_match_length,
            distance=self.settings.search_distance,
            ignore_location=self.settings.search_ignore_location,
            field_weights={
                "vehicle_brand": self.settings.brand_weight,
                "short_description": self.settings.description_weight,
            },
        )

    def search(
        self,
        query: str,
        limit: int | None = None,
        page: int | None = None,
        threshold: float | None = None,
        field: str | None = None,
    ) -> SearchResult:
        started = time.perf_counter()
        query = (query or "").strip()
        config = self.configuration(threshold=threshold, field=field)
        limit, page = self._resolve_limit(limit), self._resolve_page(page)

        ranking = rank(self.store, query, config, candidate_cap=limit * page)
        result_page = paginate(ranking.candidates, page, limit, self.max_limit, total=ranking.total)
        return self._result(result_page, query, started)

    def search_by_brand(self, brand: str, limit: int | None = None, page: int | None = None,
                        threshold: float | None = None) -> SearchResult:
        return self.search(brand, limit=limit, page=page, threshold=threshold, field="vehicle_brand")

    def search_by_description(self, description: str, limit: int | None = None, page: int | None = None,
                              threshold: float | None = None) -> SearchResult:
        return self.search(description, limit=limit, page=page, threshold=threshold, field="short_description")

    def search_with_year(
        self,
        query: str,
        year: int | None,
        limit: int | None = None,
        page: int | None = None,
        threshold: float | None = None,
    ) -> SearchResult:
        started = time.perf_counter()
        query = (query or "").strip()
        config = self.configuration(threshold=threshold)
        limit, page = self._resolve_limit(limit), self._resolve_page(page)

        ranking = rank(self.store, query, config, candidate_cap=limit * page * self.cap_factor)
        if year is None:
            result_page = paginate(ranking.candidates, page, limit, self.max_limit, total=ranking.total)
        else:
            result_page = paginate(filter_by_year(ranking.candidates, year), page, limit, self.max_limit)
        return self._result(result_page, query, started, year=year, filtered=year is not None)

    def advanced_search(
        self,
        q: str | None = None,
        brand: str | None = None,
        condition: str | None = None,
        quality: str | None = None,
        year_from: int | None = None,
        year_to: int | None = None,
        limit: int | None = None,
        page: int | None = None,
        threshold: float | None = None,
    ) -> SearchResult:
        """Fuzzy text terms combined with exact attribute filters.

        ``q`` and ``brand`` form one multi-token fuzzy query. ``condition`` and
        ``quality`` must equal the record's value ignoring case and accents.
        ``year_from``/``year_to`` bound the record's first valid year.
        """
        started = time.perf_counter()
        if not any(value and value.strip() for value in (q, brand, condition, quality)):
            raise SearchParameterError("At least one search parameter is required (q, brand, condition, or quality)")

        query = " ".join(term.strip() for term in (q, brand) if term and term.strip())
        limit, page = self._resolve_limit(limit), self._resolve_page(page)
        has_filters = any(value is not None for value in (year_from, year_to)) or bool(
            (condition or "").strip() or (quality or "").strip()
        )

        if query:
            cap = limit * page * (self.cap_factor if has_filters else 1)
            ranking = rank(self.store, query, self.configuration(threshold=threshold), candidate_cap=cap)
            candidates = list(ranking.candidates)
            total = ranking.total
        else:
            candidates = [ScoredCandidate(record=record, score=0.0) for record in self.store]
            total = len(candidates)

        if has_filters:
            candidates = self._apply_filters(candidates, condition, quality, year_from, year_to)
            total = len(candidates)

        result_page = paginate(candidates, page, limit, self.max_limit, total=total)
        return self._result(result_page, query, started, filtered=has_filters)

    def vehicle_brands(self) -> dict:
        brands = self.store.distinct_values("vehicle_brand")
        return {"brands": brands, "total": len(brands)}

    def stats(self) -> dict:
        brands = self.store.distinct_values("vehicle_brand")
        return {
            "totalItems": self.store.count(),
            "uniqueBrands": len(brands),
            "brands": brands,
            "conditions": self.store.distinct_values("condition"),
            "qualities": self.store.distinct_values("quality"),
            "lastUpdated": self.store.loaded_at.isoformat(),
        }

    def get_item(self, product_id: str) -> InventoryRecord | None:
        return self.store.lookup(product_id)

    def configuration(self, threshold: float | None = None, field: str | None = None) -> SearchConfiguration:
        if threshold is None and field is None:
            return self.base_config
        values = self.base_config.model_dump()
        if threshold is not None:
            values["threshold"] = threshold
        if field is not None:
            values["field_weights"] = {field: 1.0}
        return SearchConfiguration(**values)

    def _resolve_limit(self, limit: int | None) -> int:
        if not limit or limit < 1:
            limit = self.default_limit
        return min(limit, self.max_limit)

    @staticmethod
    def _resolve_page(page: int | None) -> int:
        if not page or page < 1:
            return 1
        return page

    @staticmethod
    def _apply_filters(
        candidates: list[ScoredCandidate],
        condition: str | None,
        quality: str | None,
        year_from: int | None,
        year_to: int | None,
    ) -> list[ScoredCandidate]:
        condition_key = fold_key(condition or "")
        quality_key = fold_key(quality or "")
        kept = []
        for candidate in candidates:
            record = candidate.record
            if condition_key and fold_key(record.condition) != condition_key:
                continue
            if quality_key and fold_key(record.quality) != quality_key:
                continue
            if year_from is not None and record.year_from < year_from:
                continue
            if year_to is not None and record.year_from > year_to:
                continue
            kept.append(candidate)
        return kept

    def _result(
        self,
        result_page: Page,
        query: str,
        started: float,
        year: int | None = None,
        filtered: bool = False,
    ) -> SearchResult:
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.debug(
            "search query=%r page=%d limit=%d total=%d returned=%d elapsed=%dms",
            query, result_page.page, result_page.limit, result_page.total, len(result_page.items), elapsed_ms,
        )
        return SearchResult(page=result_page, query=query, elapsed_ms=elapsed_ms, year=year, filtered=filtered)
