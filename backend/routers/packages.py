from typing import Optional

from fastapi import APIRouter, Depends

from core.errors import ValidationError
from db import Store, get_store
from queries.graph import fetch_dependency_edges, fetch_package_sizes
from queries.packages import fetch_package_functions, fetch_packages
from analytics.modules import filter_packages
from analytics.package_graph import build_package_graph

router = APIRouter()


@router.get("/api/packages")
def list_packages(module: Optional[str] = None, store: Store = Depends(get_store)):
    """
    Package rollups ordered by LOC desc.

    ?module=<name> restricts to one logical module. An unrecognised module
    name falls back to the full, untagged listing rather than erroring.
    """
    with store.connection() as conn:
        packages = fetch_packages(conn)
    return filter_packages(packages, module)


@router.get("/api/packages/graph")
def package_graph(store: Store = Depends(get_store)):
    # Both reads must succeed; a failure in either discards the whole graph.
    with store.connection() as conn:
        edge_rows = fetch_dependency_edges(conn)
        size_rows = fetch_package_sizes(conn)
    return build_package_graph(edge_rows, size_rows)


@router.get("/api/packages/functions")
@router.get("/api/packages/functions/{package:path}")
def package_functions(package: str = "", store: Store = Depends(get_store)):
    if not package:
        raise ValidationError("missing package name")
    with store.connection() as conn:
        return fetch_package_functions(conn, package)
