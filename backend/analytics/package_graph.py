"""
Package dependency graph — pure functions only.

The node set is derived from edge endpoints, not from the rollup table:
a package that is only ever imported (vendored, external, or too small to
get a rollup row) still shows up as a bare node.
"""
from __future__ import annotations

import networkx as nx

EDGE_KIND = "imports"
NODE_KIND = "package"


def build_package_graph(edge_rows: list[dict], size_rows: list[dict]) -> dict:
    """
    Merge dependency edges with rollup size annotations.

    edge_rows — [{source, target, weight}] ordered by weight desc
    size_rows — [{package, total_loc, total_complexity}]
    Returns   — {nodes: [{id, kind, name, line?}], edges: [{source, target, kind, weight}]}

    Edges keep their input order. Node order is unspecified.
    """
    G = nx.DiGraph()
    edges = []
    for r in edge_rows:
        src, dst = r["source"], r["target"]
        G.add_edge(src, dst)
        edges.append({"source": src, "target": dst, "kind": EDGE_KIND, "weight": r["weight"]})

    sizes = {r["package"]: r for r in size_rows}

    nodes = []
    for pkg in G.nodes:
        node = {"id": pkg, "kind": NODE_KIND, "name": pkg}
        if pkg in sizes:
            node["line"] = sizes[pkg]["total_loc"]
        nodes.append(node)

    return {"nodes": nodes, "edges": edges}
