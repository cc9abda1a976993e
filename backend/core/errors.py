"""
Error types surfaced by the API.

ValidationError → 400, QueryError → 500. Both are rendered as
{"error": "<message>"} by the handlers registered in main.py.
"""
from __future__ import annotations


class ExplorerError(Exception):
    status_code = 500


class ValidationError(ExplorerError):
    """Request input rejected before the store is touched."""

    status_code = 400


class QueryError(ExplorerError):
    """A read against the graph store failed.

    `query` names the logical query ("stats nodes", "package graph edges", ...);
    the originating sqlite3 error is kept as `cause` and chained via __cause__.
    """

    status_code = 500

    def __init__(self, query: str, cause: BaseException):
        self.query = query
        self.cause = cause
        super().__init__(f"{query}: {cause}")
