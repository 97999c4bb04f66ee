"""Shared schema types for timing snapshots.

Stable TypedDicts used when totals leave the registry (CLI output, JSON).
"""
from __future__ import annotations

from typing import Dict, TypedDict


class MetricSnapshot(TypedDict):
    calls: int
    total_ms: float


Snapshot = Dict[str, MetricSnapshot]
