"""
Package dependency graph queries — DB I/O only.
"""
from __future__ import annotations

import sqlite3

from db import fetch_all


def fetch_dependency_edges(conn: sqlite3.Connection) -> list[dict]:
    """All package → package dependency edges, heaviest first."""
    return fetch_all(
        conn,
        "package graph edges",
        """
        SELECT source, target, COALESCE(weight, 0) AS weight
        FROM dashboard_package_graph
        WHERE source IS NOT NULL AND target IS NOT NULL
        ORDER BY weight DESC, source, target
        """,
    )


def fetch_package_sizes(conn: sqlite3.Connection) -> list[dict]:
    """Size/complexity annotations for every package rollup (zero-LOC rows included)."""
    return fetch_all(
        conn,
        "package graph sizes",
        """
        SELECT package,
               COALESCE(total_loc, 0)        AS total_loc,
               COALESCE(total_complexity, 0) AS total_complexity
        FROM dashboard_package_treemap
        """,
    )
