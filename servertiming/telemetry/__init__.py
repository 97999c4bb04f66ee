"""Telemetry subpackage (lightweight).

Exposes the block timer and the diagnostic logger. The Prometheus
observer lives in :mod:`servertiming.telemetry.prom`.
"""

from .logging import get_logger
from .metrics import Timer

__all__ = [
    "Timer",
    "get_logger",
]
