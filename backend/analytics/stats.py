"""
Global stats — pure functions only.
"""
from __future__ import annotations

from analytics.modules import module_names


def compute_stats(counts: dict, package_names: list[str]) -> dict:
    """
    counts        — {nodes, edges, packages, functions, files}
    package_names — paths of non-trivial package rollups
    Returns       — DBStats: counts plus the sorted distinct module names present
    """
    return {
        "nodes":     counts.get("nodes") or 0,
        "edges":     counts.get("edges") or 0,
        "packages":  counts.get("packages") or 0,
        "functions": counts.get("functions") or 0,
        "files":     counts.get("files") or 0,
        "modules":   module_names(package_names),
    }
