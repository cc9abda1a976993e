"""
Database helpers shared across queries and routers.
No analysis logic lives here — only I/O primitives.

The graph store is opened strictly read-only. Connections come from a
small fixed-size pool; a request blocks until one is free.
"""
from __future__ import annotations

import queue
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from fastapi import Request
from loguru import logger

from core.errors import QueryError

# journal_mode/synchronous cannot be set on a read-only handle.
_PRAGMAS = (
    "PRAGMA query_only = ON",
    "PRAGMA mmap_size = 268435456",
    "PRAGMA cache_size = -65536",
)


def row_to_dict(row) -> dict:
    return dict(row)


def open_readonly(db_path: Path) -> sqlite3.Connection:
    conn = sqlite3.connect(
        f"file:{Path(db_path).resolve().as_posix()}?mode=ro",
        uri=True,
        check_same_thread=False,
    )
    conn.row_factory = sqlite3.Row
    for pragma in _PRAGMAS:
        try:
            conn.execute(pragma)
        except sqlite3.Error as exc:
            logger.warning(f"{pragma}: {exc}")
    return conn


class Store:
    """Read-only connection pool over one CPG SQLite file."""

    def __init__(self, db_path: Path, max_connections: int = 4):
        if max_connections < 1:
            raise ValueError("max_connections must be >= 1")
        self.db_path = Path(db_path)
        self.max_connections = max_connections
        self._idle: queue.LifoQueue[sqlite3.Connection] = queue.LifoQueue()
        self._slots = queue.Queue(maxsize=max_connections)
        self._closed = False

    def ping(self) -> None:
        """Open a connection and run a trivial query; raises QueryError on failure."""
        with self.connection() as conn:
            scalar(conn, "ping", "SELECT 1")

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        if self._closed:
            raise QueryError("open store", sqlite3.ProgrammingError("store is closed"))
        self._slots.put(None)  # blocks while max_connections are in use
        try:
            try:
                conn = self._idle.get_nowait()
            except queue.Empty:
                try:
                    conn = open_readonly(self.db_path)
                except sqlite3.Error as exc:
                    raise QueryError("open store", exc) from exc
            try:
                yield conn
            finally:
                # a connection checked out across close() is closed on return
                if self._closed:
                    conn.close()
                else:
                    self._idle.put(conn)
        finally:
            self._slots.get_nowait()

    def close(self) -> None:
        """Close idle connections and refuse new checkouts."""
        self._closed = True
        while True:
            try:
                self._idle.get_nowait().close()
            except queue.Empty:
                break


def get_store(request: Request) -> Store:
    return request.app.state.store


# ── Query helpers ────────────────────────────────────────────────────────────

def fetch_all(conn: sqlite3.Connection, query: str, sql: str, params: tuple = ()) -> list[dict]:
    """Run a query and return every row as a dict; store errors become QueryError."""
    try:
        rows = conn.execute(sql, params).fetchall()
    except sqlite3.Error as exc:
        raise QueryError(query, exc) from exc
    return [row_to_dict(r) for r in rows]


def scalar(conn: sqlite3.Connection, query: str, sql: str, params: tuple = ()):
    """Run a scalar query and return the single value."""
    try:
        row = conn.execute(sql, params).fetchone()
    except sqlite3.Error as exc:
        raise QueryError(query, exc) from exc
    return row[0] if row else None
