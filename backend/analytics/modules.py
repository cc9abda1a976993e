"""
Logical module classification — pure functions only.

A package path is bucketed into one of five logical modules by an ordered
cascade of substring rules; the first matching rule wins and "other"
catches everything else. The same rule table drives per-module rollups
and the ?module= filter on the package listing, so the two can never
disagree.
"""
from __future__ import annotations

from typing import Callable, NamedTuple

DEFAULT_MODULE = "other"


class ModuleRule(NamedTuple):
    label:     str
    predicate: Callable[[str], bool]


def _contains(fragment: str) -> Callable[[str], bool]:
    return lambda path: fragment in path


# Order matters: a prometheus/prometheus path that vendors client_golang is "prometheus".
MODULE_RULES: list[ModuleRule] = [
    ModuleRule("prometheus",    _contains("/prometheus/prometheus/")),
    ModuleRule("client_golang", _contains("client_golang")),
    ModuleRule("adapter",       _contains("prometheus-adapter")),
    ModuleRule("alertmanager",  _contains("alertmanager")),
]

MODULE_NAMES: tuple[str, ...] = tuple(r.label for r in MODULE_RULES) + (DEFAULT_MODULE,)

_RULES_BY_LABEL = {r.label: r for r in MODULE_RULES}


def classify(package: str | None) -> str:
    """Map a package path to its logical module name. Total over any string."""
    path = package or ""
    for rule in MODULE_RULES:
        if rule.predicate(path):
            return rule.label
    return DEFAULT_MODULE


def module_names(packages: list[str]) -> list[str]:
    """Distinct classified module names, sorted lexicographically."""
    return sorted({classify(p) for p in packages})


def matches_module(package: str | None, module: str) -> bool:
    """
    True if `package` belongs in the listing filtered by `module`.

    Named modules test their own rule directly; "other" is the negation of
    every named rule. Unrecognised names are not handled here — see
    filter_packages.
    """
    path = package or ""
    if module == DEFAULT_MODULE:
        return not any(rule.predicate(path) for rule in MODULE_RULES)
    return _RULES_BY_LABEL[module].predicate(path)


def filter_packages(packages: list[dict], module: str | None) -> list[dict]:
    """
    Restrict a package listing to one logical module, preserving order.

    packages — [{package, files, functions, ...}] as returned by fetch_packages
    module   — a name from MODULE_NAMES; rows are tagged with it.
               None, "" or an unrecognised name returns the listing unchanged
               and untagged.
    """
    if not module or module not in MODULE_NAMES:
        return packages
    return [
        {**p, "module": module}
        for p in packages
        if matches_module(p["package"], module)
    ]


def aggregate_modules(packages: list[dict]) -> list[dict]:
    """
    Sum per-package rollups into per-module totals.

    packages — [{package, functions, loc, complexity}], zero-LOC rows already excluded
    Returns  — [{name, packages, functions, loc, complexity}] sorted by loc desc
    """
    totals: dict[str, dict] = {}
    for p in packages:
        name = classify(p["package"])
        if name not in totals:
            totals[name] = {"name": name, "packages": 0, "functions": 0, "loc": 0, "complexity": 0}
        t = totals[name]
        t["packages"]   += 1
        t["functions"]  += p.get("functions") or 0
        t["loc"]        += p.get("loc") or 0
        t["complexity"] += p.get("complexity") or 0

    return sorted(totals.values(), key=lambda t: (-t["loc"], t["name"]))
