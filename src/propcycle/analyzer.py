"""
Cycler Analyzer — diagnostics and inventory of a composition tree.

This module provides lightweight analysis of Cycler objects:
    - Tree shape (depth, node counts, operator mix)
    - Key inventory and distinct values per key
    - Repeated records
    - Warning flags for styling risk

IMPORTANT: This is read-only. It does NOT modify the cycler.
It only produces reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Set

from propcycle.core import CompositionOperator, Cycler


@dataclass
class CompositionMetrics:
    """Metrics about a single composition tree."""
    depth: int = 0
    node_count: int = 0
    leaf_count: int = 0
    pairwise_count: int = 0
    product_count: int = 0
    keys: Set[Hashable] = field(default_factory=set)

    def add(self, other: CompositionMetrics) -> None:
        self.depth = max(self.depth, other.depth)
        self.node_count += other.node_count
        self.leaf_count += other.leaf_count
        self.pairwise_count += other.pairwise_count
        self.product_count += other.product_count
        self.keys.update(other.keys)


def _leaf_metrics(keys: Set[Hashable]) -> CompositionMetrics:
    return CompositionMetrics(node_count=1, leaf_count=1, keys=set(keys))


def _analyze_node(node: Cycler) -> CompositionMetrics:
    """Recursively analyze a composition tree."""
    metrics = CompositionMetrics(node_count=1)

    if node.operator is not None:
        if node.left is not None:
            left = _analyze_node(node.left)
        else:
            # Records stored directly on the composite node
            left = _leaf_metrics(node.keys - node.right.keys)
        right = _analyze_node(node.right)
        metrics.add(left)
        metrics.add(right)
        metrics.depth = 1 + max(left.depth, right.depth)
        if node.operator is CompositionOperator.PAIRWISE:
            metrics.pairwise_count += 1
        else:
            metrics.product_count += 1

    elif node.left is not None:
        # Wrapper around a copied Cycler
        inner = _analyze_node(node.left)
        metrics.add(inner)
        metrics.depth = inner.depth

    else:
        return _leaf_metrics(node.keys)

    return metrics


@dataclass
class CyclerReport:
    """Analysis report for a cycler."""

    keys: Set[Hashable] = field(default_factory=set)
    length: int = 0
    metrics: CompositionMetrics = field(default_factory=CompositionMetrics)

    # Value inventory
    values_per_key: Dict[Hashable, int] = field(default_factory=dict)
    constant_keys: Set[Hashable] = field(default_factory=set)
    repeated_records: int = 0

    # Warnings and flags
    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def _freeze(value: Any) -> Any:
    """Hashable stand-in for a record, or the value itself."""
    if isinstance(value, dict):
        return frozenset(value.items())
    return value


def _count_distinct(values: List[Any]) -> int:
    """Distinct values by equality; values need not be hashable."""
    try:
        return len({_freeze(v) for v in values})
    except TypeError:
        # Unhashable values: fall back to a linear scan per value
        pass

    seen: List[Any] = []
    for v in values:
        if v not in seen:
            seen.append(v)
    return len(seen)


def analyze_cycler(cc: Cycler, max_depth: int = 8, max_length: int = 1000) -> CyclerReport:
    """
    Perform analysis of a Cycler.

    Checks for:
    - Composition tree shape
    - Distinct values per key
    - Records that repeat an earlier record
    - Size and depth thresholds

    Args:
        cc: Cycler to analyze
        max_depth: Depth above which simplify() is suggested
        max_length: Length above which the cycle is flagged as large

    Returns a CyclerReport with metrics and warnings.
    """
    report = CyclerReport(keys=cc.keys, length=len(cc))
    report.metrics = _analyze_node(cc)

    # =========================================================================
    # 1. VALUE INVENTORY
    # =========================================================================

    columns = cc.by_key()
    for key, values in columns.items():
        report.values_per_key[key] = _count_distinct(values)
        if len(values) > 1 and report.values_per_key[key] == 1:
            report.constant_keys.add(key)

    records = list(cc)
    report.repeated_records = len(records) - _count_distinct(records)

    # =========================================================================
    # 2. WARNING FLAGS
    # =========================================================================

    if report.length == 0:
        report.add_warning("Empty cycler: iteration produces no records")

    if report.metrics.depth > max_depth:
        report.add_warning(
            f"Deep composition: depth {report.metrics.depth}, consider simplify()"
        )

    if report.length > max_length:
        report.add_warning(f"Large cycle: {report.length} records")

    if report.repeated_records:
        report.add_warning(f"Repeated records: {report.repeated_records}")

    if report.constant_keys:
        report.add_warning(
            f"Constant keys: {', '.join(sorted(map(repr, report.constant_keys)))}"
        )

    return report
