"""
Bootstrap tests — flag/env resolution and app construction.
"""
from argparse import Namespace
from pathlib import Path

import pytest

from core.config import Settings
from main import create_app
from serve import resolve_settings


def make_args(db="", port=None, host=""):
    return Namespace(db=db, port=port, host=host)


class TestResolveSettings:
    def test_flags(self, monkeypatch):
        monkeypatch.delenv("CPG_DB_PATH", raising=False)
        monkeypatch.delenv("CPG_PORT", raising=False)
        s = resolve_settings(make_args(db="cpg.db", port=9000, host="127.0.0.1"), env={})
        assert s.db_path == Path("cpg.db")
        assert s.port == 9000
        assert s.host == "127.0.0.1"

    def test_db_from_env_when_flag_empty(self, monkeypatch):
        monkeypatch.setenv("CPG_DB_PATH", "/data/cpg.db")
        s = resolve_settings(make_args(), env={})
        assert s.db_path == Path("/data/cpg.db")

    def test_db_flag_wins_over_env(self, monkeypatch):
        monkeypatch.setenv("CPG_DB_PATH", "/data/cpg.db")
        s = resolve_settings(make_args(db="local.db"), env={})
        assert s.db_path == Path("local.db")

    def test_port_env_wins_over_flag(self, monkeypatch):
        monkeypatch.setenv("CPG_PORT", "7070")
        s = resolve_settings(make_args(port=9000), env={"CPG_PORT": "7070"})
        assert s.port == 7070

    def test_defaults(self, monkeypatch):
        for var in ("CPG_DB_PATH", "CPG_PORT", "CPG_HOST", "CPG_MAX_CONNECTIONS"):
            monkeypatch.delenv(var, raising=False)
        s = resolve_settings(make_args(), env={})
        assert s.port == 8080
        assert s.max_connections == 4


class TestCreateApp:
    def test_requires_db_path(self, tmp_path):
        with pytest.raises(ValueError):
            create_app(Settings(db_path=None, frontend_dist=tmp_path))

    def test_store_from_settings(self, db_path, tmp_path):
        app = create_app(Settings(db_path=db_path, max_connections=3, frontend_dist=tmp_path / "x"))
        assert app.state.store.db_path == db_path
        assert app.state.store.max_connections == 3
        app.state.store.close()
