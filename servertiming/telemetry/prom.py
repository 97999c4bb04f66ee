"""Prometheus integration.

Mirrors every completed timer into a labelled ``Summary`` so scrapers see
the same call count and summed duration the registry keeps.
"""
from __future__ import annotations

import weakref
from typing import Optional

from prometheus_client import REGISTRY, CollectorRegistry, Summary

METRIC_NAME = "servertiming_metric_duration_milliseconds"

# Cache created summaries to avoid duplicate registration errors when
# observers are constructed multiple times (e.g., once per request).
# Entries go away with their collector registry.
_SUMMARIES: "weakref.WeakKeyDictionary[CollectorRegistry, Summary]" = weakref.WeakKeyDictionary()


def _summary_for(registry: CollectorRegistry) -> Summary:
    summary = _SUMMARIES.get(registry)
    if summary is None:
        summary = Summary(
            METRIC_NAME,
            "Elapsed time of completed server timing metrics",
            ["metric"],
            registry=registry,
        )
        _SUMMARIES[registry] = summary
    return summary


class PrometheusObserver:
    """Registry observer feeding ``servertiming_metric_duration_milliseconds``."""

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        self._summary = _summary_for(registry if registry is not None else REGISTRY)

    def __call__(self, name: str, duration_ms: float) -> None:
        self._summary.labels(metric=name).observe(duration_ms)
