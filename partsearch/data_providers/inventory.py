from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import httpx
from pydantic import ValidationError

from partsearch.schemas import InventoryRecord

logger = logging.getLogger(__name__)


class InventoryLoadError(RuntimeError):
    """The inventory could not be read or did not contain valid records."""


def load_inventory(
    source: str | Path,
    timeout: float = 12.0,
    transport: httpx.BaseTransport | None = None,
) -> list[InventoryRecord]:
    location = str(source)
    if _is_valid_http_url(location):
        payload = _fetch_remote(location, timeout, transport)
    else:
        payload = _read_local(Path(location))
    records = parse_inventory(payload)
    logger.info("Loaded %d inventory items from %s", len(records), location)
    return records


def parse_inventory(payload: Any) -> list[InventoryRecord]:
    items = payload.get("items") if isinstance(payload, dict) else payload
    if not isinstance(items, list):
        raise InventoryLoadError("Inventory payload must be a JSON array of items.")

    records: list[InventoryRecord] = []
    for index, item in enumerate(items):
        try:
            records.append(InventoryRecord.model_validate(item))
        except ValidationError as exc:
            raise InventoryLoadError(f"Invalid inventory item at index {index}: {exc}") from exc
    return records


def _read_local(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8") as handle:
            return json.load(handle)
    except FileNotFoundError as exc:
        raise InventoryLoadError(f"Inventory file not found: {path}") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise InventoryLoadError(f"Could not read inventory file {path}: {exc}") from exc


def _fetch_remote(url: str, timeout: float, transport: httpx.BaseTransport | None) -> Any:
    headers = {"User-Agent": "partsearch/0.1", "Accept": "application/json"}
    client_timeout = httpx.Timeout(connect=10.0, read=max(20.0, float(timeout)), write=10.0, pool=10.0)
    with httpx.Client(timeout=client_timeout, headers=headers, transport=transport) as client:
        try:
            response = client.get(url)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise InventoryLoadError(f"Inventory HTTP {exc.response.status_code} from {url}") from exc
        except httpx.HTTPError as exc:
            raise InventoryLoadError(f"Inventory network error: {exc.__class__.__name__}") from exc
        except ValueError as exc:
            raise InventoryLoadError(f"Inventory response from {url} is not valid JSON") from exc


def _is_valid_http_url(value: str) -> bool:
    if not value:
        return False
    parsed = urlparse(value)
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)
