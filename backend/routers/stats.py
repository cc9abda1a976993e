from fastapi import APIRouter, Depends

from db import Store, get_store
from queries.stats import fetch_counts, fetch_package_names
from analytics.stats import compute_stats

router = APIRouter()


@router.get("/api/stats")
def get_stats(store: Store = Depends(get_store)):
    with store.connection() as conn:
        counts = fetch_counts(conn)
        names  = fetch_package_names(conn)
    return compute_stats(counts, names)
