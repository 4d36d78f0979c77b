from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator


SEARCHABLE_FIELDS = ("vehicle_brand", "short_description")
DEFAULT_FIELD_WEIGHTS = {"vehicle_brand": 0.6, "short_description": 0.4}


class InventoryRecord(BaseModel):
    """One inventory line as it appears in the source dataset.

    Fields are read from the dataset's Spanish keys; unknown keys are kept so the
    API can echo the full source item back.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    product_id: str = Field(alias="producto_id")
    vehicle_brand: str = Field(alias="marca_vehiculo")
    short_description: str = Field(alias="descripcion_corta")
    condition: str = Field(default="", alias="condicion")
    quality: str = Field(default="", alias="calidad_repuesto")
    year_from: int = Field(alias="anio_desde")
    year_to: int = Field(alias="anio_hasta")


class SearchConfiguration(BaseModel):
    """Matching tolerance and field weights for one ranking run.

    threshold is the highest match cost still accepted (0 = exact only,
    1 = anything). Matches starting within ``distance`` characters of the
    beginning of a field carry no location penalty.
    """

    model_config = ConfigDict(frozen=True)

    threshold: float = Field(default=0.3, ge=0.0, le=1.0)
    min_match_length: int = Field(default=3, ge=1)
    distance: int = Field(default=100, ge=0)
    ignore_location: bool = False
    field_weights: dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_FIELD_WEIGHTS))

    @field_validator("field_weights")
    @classmethod
    def _check_field_weights(cls, value: dict[str, float]) -> dict[str, float]:
        unknown = sorted(set(value) - set(SEARCHABLE_FIELDS))
        if unknown:
            raise ValueError(f"unknown searchable field(s): {', '.join(unknown)}")
        for field, weight in value.items():
            if not 0.0 <= weight <= 1.0:
                raise ValueError(f"weight for {field} must be between 0 and 1")
        total = sum(value.values())
        if total <= 0.0:
            raise ValueError("at least one field needs a positive weight")
        if total > 1.0 + 1e-9:
            raise ValueError(f"field weights sum to {total:.3f}, must not exceed 1.0")
        return value


@dataclass(frozen=True)
class FieldMatch:
    field: str
    value: str
    spans: tuple[tuple[int, int], ...] = ()  # half-open ranges into value


@dataclass(frozen=True)
class ScoredCandidate:
    record: InventoryRecord
    score: float
    matches: tuple[FieldMatch, ...] = ()


@dataclass(frozen=True)
class Ranking:
    candidates: tuple[ScoredCandidate, ...]
    total: int  # matches before the candidate cap was applied


@dataclass(frozen=True)
class Page:
    items: tuple[ScoredCandidate, ...]
    total: int
    page: int
    limit: int
    total_pages: int


@dataclass(frozen=True)
class SearchResult:
    page: Page
    query: str
    elapsed_ms: int
    year: int | None = None
    filtered: bool = False
