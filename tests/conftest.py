from dataclasses import replace

import pytest

from partsearch.config import Settings
from partsearch.schemas import InventoryRecord, SearchConfiguration
from partsearch.store.record_store import RecordStore


def _record(product_id, brand, description, year_from, year_to, condition="Nuevo", quality="Original", **extra):
    return InventoryRecord(
        producto_id=product_id,
        marca_vehiculo=brand,
        descripcion_corta=description,
        condicion=condition,
        calidad_repuesto=quality,
        anio_desde=year_from,
        anio_hasta=year_to,
        **extra,
    )


@pytest.fixture
def make_record():
    return _record


@pytest.fixture
def toyota_store():
    return RecordStore(
        [
            _record("A1", "Toyota", "sensor oxigeno", 2015, 2020, precio=185.0),
            _record("A2", "Toyota", "manguera radiador", 2010, 2014, condition="Usado", quality="Alternativo"),
        ]
    )


@pytest.fixture
def config():
    return SearchConfiguration(threshold=0.3, min_match_length=3, distance=100)


@pytest.fixture
def test_settings():
    return replace(
        Settings(),
        search_threshold=0.3,
        search_min_match_length=3,
        search_distance=100,
        search_ignore_location=False,
        brand_weight=0.6,
        description_weight=0.4,
        default_search_limit=10,
        max_search_limit=100,
        year_filter_cap_factor=10,
        environment="test",
        cors_origins="*",
        enable_ui=False,
    )
