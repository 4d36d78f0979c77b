import json

import httpx
import pytest

from partsearch.data_providers.inventory import InventoryLoadError, load_inventory, parse_inventory

ITEMS = [
    {
        "producto_id": "PRD-1",
        "marca_vehiculo": "Toyota",
        "descripcion_corta": "Sensor de oxígeno",
        "condicion": "Nuevo",
        "calidad_repuesto": "Original",
        "anio_desde": 2015,
        "anio_hasta": "2020",
        "precio": 185.0,
    }
]


def test_parse_inventory_accepts_array_and_items_object():
    assert parse_inventory(ITEMS)[0].product_id == "PRD-1"
    assert parse_inventory({"items": ITEMS})[0].year_to == 2020


def test_parse_inventory_keeps_extra_source_fields():
    record = parse_inventory(ITEMS)[0]
    dumped = record.model_dump(by_alias=True)
    assert dumped["precio"] == 185.0
    assert dumped["marca_vehiculo"] == "Toyota"


def test_parse_inventory_rejects_non_list_payload():
    with pytest.raises(InventoryLoadError):
        parse_inventory({"data": ITEMS})


def test_parse_inventory_names_the_bad_item():
    broken = ITEMS + [{"producto_id": "PRD-2", "marca_vehiculo": "Kia"}]
    with pytest.raises(InventoryLoadError, match="index 1"):
        parse_inventory(broken)


def test_load_inventory_from_file(tmp_path):
    path = tmp_path / "inventory.json"
    path.write_text(json.dumps(ITEMS), encoding="utf-8")
    records = load_inventory(path)
    assert [r.product_id for r in records] == ["PRD-1"]
    assert records[0].short_description == "Sensor de oxígeno"


def test_load_inventory_missing_file(tmp_path):
    with pytest.raises(InventoryLoadError, match="not found"):
        load_inventory(tmp_path / "missing.json")


def test_load_inventory_bad_json(tmp_path):
    path = tmp_path / "inventory.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(InventoryLoadError):
        load_inventory(path)


def test_load_inventory_from_url():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/inventory.json"
        return httpx.Response(200, json=ITEMS)

    records = load_inventory("https://inventory.example/inventory.json", transport=httpx.MockTransport(handler))
    assert records[0].vehicle_brand == "Toyota"


def test_load_inventory_url_http_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    with pytest.raises(InventoryLoadError, match="HTTP 503"):
        load_inventory("https://inventory.example/inventory.json", transport=transport)


def test_load_inventory_url_invalid_json():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))
    with pytest.raises(InventoryLoadError, match="not valid JSON"):
        load_inventory("https://inventory.example/inventory.json", transport=transport)
