"""
Global store counts — DB I/O only.
"""
from __future__ import annotations

import sqlite3

from db import fetch_all, scalar
from queries.packages import FUNC_LITERAL


def fetch_counts(conn: sqlite3.Connection) -> dict:
    """
    Five independent scalar counts. No snapshot is taken across them;
    the store is immutable in normal operation.
    """
    return {
        "nodes": scalar(conn, "stats nodes", "SELECT COUNT(*) FROM nodes"),
        "edges": scalar(conn, "stats edges", "SELECT COUNT(*) FROM edges"),
        "packages": scalar(
            conn, "stats packages",
            "SELECT COUNT(*) FROM dashboard_package_treemap WHERE total_loc > 0 AND package IS NOT NULL",
        ),
        "functions": scalar(
            conn, "stats functions",
            "SELECT COUNT(*) FROM nodes WHERE kind = 'function' AND name != ?",
            (FUNC_LITERAL,),
        ),
        "files": scalar(
            conn, "stats files",
            "SELECT COUNT(DISTINCT file) FROM nodes WHERE file IS NOT NULL AND file != ''",
        ),
    }


def fetch_package_names(conn: sqlite3.Connection) -> list[str]:
    """Paths of every package rollup with total_loc > 0."""
    rows = fetch_all(
        conn,
        "stats modules",
        "SELECT package FROM dashboard_package_treemap WHERE total_loc > 0 AND package IS NOT NULL",
    )
    return [r["package"] for r in rows]
