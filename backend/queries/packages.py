"""
Package rollup and per-package function queries — DB I/O only.
"""
from __future__ import annotations

import sqlite3

from db import fetch_all

FUNC_LITERAL = "func literal"

# Best doc comment per package: the longest "Package ..." comment, ties by node id.
_DOC_JOIN = """
    LEFT JOIN (
        SELECT package, name,
               ROW_NUMBER() OVER (
                   PARTITION BY package ORDER BY LENGTH(name) DESC, id
               ) AS rn
        FROM nodes
        WHERE kind = 'comment' AND substr(name, 1, 8) = 'Package '
    ) doc ON doc.package = t.package AND doc.rn = 1
"""


def fetch_packages(conn: sqlite3.Connection) -> list[dict]:
    """
    Every package rollup with total_loc > 0, largest first.

    Returns [{package, files, functions, types, loc, complexity, description?}].
    `description` is omitted when the package has no doc comment.
    """
    rows = fetch_all(
        conn,
        "packages",
        f"""
        SELECT t.package                         AS package,
               COALESCE(t.file_count, 0)         AS files,
               COALESCE(t.function_count, 0)     AS functions,
               COALESCE(t.type_count, 0)         AS types,
               COALESCE(t.total_loc, 0)          AS loc,
               COALESCE(t.total_complexity, 0)   AS complexity,
               COALESCE(doc.name, '')            AS description
        FROM dashboard_package_treemap t
        {_DOC_JOIN}
        WHERE t.total_loc > 0 AND t.package IS NOT NULL
        ORDER BY t.total_loc DESC, t.package
        """,
    )
    for r in rows:
        if not r["description"]:
            del r["description"]
    return rows


def fetch_package_functions(conn: sqlite3.Connection, package: str) -> list[dict]:
    """Named functions declared in `package`, ordered by name."""
    return fetch_all(
        conn,
        "package functions",
        """
        SELECT name,
               COALESCE(file, '') AS file,
               COALESCE(line, 0)  AS line
        FROM nodes
        WHERE package = ? AND kind = 'function' AND name != ?
        ORDER BY name, file, line
        """,
        (package, FUNC_LITERAL),
    )
