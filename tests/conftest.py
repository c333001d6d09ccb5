from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from team_tracker.db.session import configure_database, dispose_database, init_database, unit_of_work
from team_tracker.main import create_app
from team_tracker.models.domain import CatalogEntry
from team_tracker.persistence.locations import insert_catalog, list_location_rows


@pytest.fixture
def database(tmp_path: Path):
    configure_database(f"sqlite:///{tmp_path / 'tracker.db'}", timeout=2.0)
    init_database()
    yield
    dispose_database()


@pytest.fixture
def locations(database) -> dict[str, int]:
    """Seed locations A, B and C; returns their ids by name."""
    entries = [
        CatalogEntry(name="A", latitude=36.8508, longitude=-76.2859),
        CatalogEntry(name="B", latitude=36.8529, longitude=-76.2874),
        CatalogEntry(name="C", latitude=36.8468, longitude=-76.2921),
    ]
    with unit_of_work(write=True) as session:
        insert_catalog(session, entries)
        ids = {row.name: row.id for row in list_location_rows(session)}
    return ids


@pytest.fixture
def api_client(locations) -> TestClient:
    return TestClient(create_app())
