"""Shared pytest fixtures: GeoPackage-like SQLite images built in memory."""
import sqlite3

import pytest

from gpkg_csv_converter.settings import get_settings

GPKG_INTERNALS = [
    "CREATE TABLE gpkg_spatial_ref_sys (srs_name TEXT, srs_id INTEGER PRIMARY KEY)",
    "CREATE TABLE gpkg_contents (table_name TEXT PRIMARY KEY, data_type TEXT)",
    "INSERT INTO gpkg_contents VALUES ('parcels', 'attributes'), ('roads', 'features')",
]


def build_gpkg(statements):
    """Run SQL statements against a fresh in-memory database and return its image."""
    conn = sqlite3.connect(":memory:")
    try:
        for sql in statements:
            conn.execute(sql)
        conn.commit()
        return conn.serialize()
    finally:
        conn.close()


@pytest.fixture
def scenario_gpkg():
    return build_gpkg(GPKG_INTERNALS + [
        "CREATE TABLE parcels (id INTEGER, name TEXT)",
        "INSERT INTO parcels VALUES (1, 'A'), (2, 'B')",
        "CREATE TABLE roads (id INTEGER, geom BLOB)",
        "INSERT INTO roads VALUES (1, x'DEAD')",
        "CREATE TABLE rtree_roads_geom (id INTEGER, minx REAL, maxx REAL)",
        "INSERT INTO rtree_roads_geom VALUES (1, 0.0, 1.0)",
    ])


@pytest.fixture
def internals_only_gpkg():
    return build_gpkg(GPKG_INTERNALS + [
        "CREATE TABLE rtree_roads_geom (id INTEGER, minx REAL)",
        "CREATE TABLE GPKG_Extensions (name TEXT)",
    ])


@pytest.fixture
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("GPKG_CSV_OUTPUT_DIR", str(tmp_path / "out"))
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()
