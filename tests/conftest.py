"""
Shared fixtures for the CPG explorer tests.

Each test gets a fresh SQLite file built from an SQL fixture under
tests/fixtures/, opened through the same read-only Store the API uses.
No running server required — HTTP tests go through FastAPI's TestClient.
"""
import sqlite3
import sys as _sys
from pathlib import Path

import pytest

_sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from core.config import Settings  # noqa: E402
from db import Store  # noqa: E402
from main import create_app  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def build_db(path: Path, fixture: str) -> Path:
    """Write a fixture SQL script into a new SQLite file at `path`."""
    conn = sqlite3.connect(str(path))
    conn.executescript((FIXTURES_DIR / fixture).read_text())
    conn.commit()
    conn.close()
    return path


@pytest.fixture
def db_path(tmp_path) -> Path:
    return build_db(tmp_path / "cpg.db", "fixture.sql")


@pytest.fixture
def modules_db_path(tmp_path) -> Path:
    return build_db(tmp_path / "modules.db", "modules.sql")


@pytest.fixture
def store(db_path):
    s = Store(db_path, max_connections=2)
    yield s
    s.close()


@pytest.fixture
def modules_store(modules_db_path):
    s = Store(modules_db_path, max_connections=2)
    yield s
    s.close()


@pytest.fixture
def conn(store):
    with store.connection() as c:
        yield c


@pytest.fixture
def modules_conn(modules_store):
    with modules_store.connection() as c:
        yield c


def make_client(store: Store, tmp_path: Path):
    from fastapi.testclient import TestClient

    settings = Settings(db_path=store.db_path, frontend_dist=tmp_path / "no-frontend")
    return TestClient(create_app(settings, store=store))


@pytest.fixture
def client(store, tmp_path):
    with make_client(store, tmp_path) as c:
        yield c


@pytest.fixture
def modules_client(modules_store, tmp_path):
    with make_client(modules_store, tmp_path) as c:
        yield c
