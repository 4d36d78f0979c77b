from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import datetime, timezone

from partsearch.schemas import InventoryRecord


class RecordStore:
    """
    Read-only, in-memory inventory.
    Built once at startup and shared by every request without locking.
    """

    def __init__(self, records: Iterable[InventoryRecord], loaded_at: datetime | None = None) -> None:
        self._records: tuple[InventoryRecord, ...] = tuple(records)
        self._by_id: dict[str, InventoryRecord] = {}
        for record in self._records:
            # First occurrence wins for duplicated ids.
            self._by_id.setdefault(record.product_id, record)
        self.loaded_at = loaded_at or datetime.now(timezone.utc)

    def __iter__(self) -> Iterator[InventoryRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[InventoryRecord, ...]:
        return self._records

    def count(self) -> int:
        return len(self._records)

    def lookup(self, product_id: str) -> InventoryRecord | None:
        return self._by_id.get(product_id)

    def distinct_values(self, field: str) -> list[str]:
        if field not in InventoryRecord.model_fields:
            raise ValueError(f"Unknown inventory field: {field}")
        return sorted({str(getattr(record, field)) for record in self._records})
