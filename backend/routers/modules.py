from fastapi import APIRouter, Depends

from db import Store, get_store
from queries.packages import fetch_packages
from analytics.modules import aggregate_modules

router = APIRouter()


@router.get("/api/modules")
def list_modules(store: Store = Depends(get_store)):
    """Per-module totals over every non-empty package, largest module first."""
    with store.connection() as conn:
        packages = fetch_packages(conn)
    return aggregate_modules(packages)
