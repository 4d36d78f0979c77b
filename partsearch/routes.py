from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from partsearch.schemas import InventoryRecord, ScoredCandidate, SearchResult
from partsearch.services.search_service import SearchService

router = APIRouter(prefix="/api", tags=["Search"])

FIELD_ALIASES = {name: info.alias or name for name, info in InventoryRecord.model_fields.items()}


def _service(request: Request) -> SearchService:
    return request.app.state.service


def _as_int(value: str | None) -> int | None:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def _as_float(value: str | None) -> float | None:
    try:
        return float(str(value).strip())
    except (TypeError, ValueError):
        return None


def _bad_request(message: str, example: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"success": False, "message": message, "example": example})


def record_payload(record: InventoryRecord) -> dict[str, Any]:
    return record.model_dump(by_alias=True)


def candidate_payload(candidate: ScoredCandidate) -> dict[str, Any]:
    return {
        **record_payload(candidate.record),
        "score": candidate.score,
        "matches": [
            {"key": FIELD_ALIASES[m.field], "value": m.value, "spans": [list(span) for span in m.spans]}
            for m in candidate.matches
        ],
    }


def search_payload(result: SearchResult, **extra: Any) -> dict[str, Any]:
    page = result.page
    data = {
        "results": [candidate_payload(c) for c in page.items],
        "total": page.total,
        "page": page.page,
        "limit": page.limit,
        "totalPages": page.total_pages,
        "query": result.query,
        "searchTime": f"{result.elapsed_ms}ms",
    }
    data.update(extra)
    return {"success": True, "data": data}


@router.get("/search")
def search(request: Request, q: str | None = None, limit: str | None = None, page: str | None = None,
           threshold: str | None = None):
    if not q or not q.strip():
        return _bad_request("Search query is required", "/api/search?q=Hyundai&limit=10&page=1")
    result = _service(request).search(q, limit=_as_int(limit), page=_as_int(page), threshold=_as_float(threshold))
    return search_payload(result)


@router.get("/search/brand")
def search_by_brand(request: Request, brand: str | None = None, limit: str | None = None,
                    page: str | None = None, threshold: str | None = None):
    if not brand or not brand.strip():
        return _bad_request("Brand parameter is required", "/api/search/brand?brand=Hyundai&limit=10&page=1")
    result = _service(request).search_by_brand(
        brand, limit=_as_int(limit), page=_as_int(page), threshold=_as_float(threshold)
    )
    return search_payload(result)


@router.get("/search/description")
def search_by_description(request: Request, description: str | None = None, limit: str | None = None,
                          page: str | None = None, threshold: str | None = None):
    if not description or not description.strip():
        return _bad_request(
            "Description parameter is required",
            "/api/search/description?description=manguera&limit=10&page=1",
        )
    result = _service(request).search_by_description(
        description, limit=_as_int(limit), page=_as_int(page), threshold=_as_float(threshold)
    )
    return search_payload(result)


@router.get("/search/advanced")
def advanced_search(
    request: Request,
    q: str | None = None,
    brand: str | None = None,
    condition: str | None = None,
    quality: str | None = None,
    yearFrom: str | None = None,
    yearTo: str | None = None,
    limit: str | None = None,
    page: str | None = None,
    threshold: str | None = None,
):
    if not any(value and value.strip() for value in (q, brand, condition, quality)):
        return _bad_request(
            "At least one search parameter is required (q, brand, condition, or quality)",
            "/api/search/advanced?q=Hyundai&condition=Nuevo&limit=10",
        )
    result = _service(request).advanced_search(
        q=q,
        brand=brand,
        condition=condition,
        quality=quality,
        year_from=_as_int(yearFrom),
        year_to=_as_int(yearTo),
        limit=_as_int(limit),
        page=_as_int(page),
        threshold=_as_float(threshold),
    )
    return search_payload(result, filtered=result.filtered)


@router.get("/search/year-range")
def search_with_year_range(request: Request, q: str | None = None, year: str | None = None,
                           limit: str | None = None, page: str | None = None):
    example = "/api/search/year-range?q=Hyundai manguera&year=2016&limit=10"
    if not q or not q.strip():
        return _bad_request("Search query is required", example)
    search_year = _as_int(year)
    if search_year is None:
        return _bad_request("Valid year parameter is required", example)
    result = _service(request).search_with_year(q, search_year, limit=_as_int(limit), page=_as_int(page))
    return search_payload(result, searchYear=result.year, yearFiltered=result.filtered)


@router.get("/vehicles")
def vehicle_brands(request: Request):
    return {"success": True, "data": _service(request).vehicle_brands()}


@router.get("/stats")
def search_stats(request: Request):
    return {"success": True, "data": _service(request).stats()}


@router.get("/item/{product_id}")
def get_item(request: Request, product_id: str):
    record = _service(request).get_item(product_id)
    if record is None:
        return JSONResponse(status_code=404, content={"success": False, "message": "Item not found"})
    return {"success": True, "data": record_payload(record)}
