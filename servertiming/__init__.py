"""servertiming: named timers reported through Server-Timing headers or a log file.

See https://www.w3.org/TR/server-timing/ for the header format.
"""

from .context import current_registry, log, profile, set_log_file, start, stop, use_registry
from .core.errors import ConfigurationError, ServerTimingError, UnbalancedTimerError
from .registry import MetricTotals, TimingRegistry

__all__ = [
    "ConfigurationError",
    "MetricTotals",
    "ServerTimingError",
    "TimingRegistry",
    "UnbalancedTimerError",
    "current_registry",
    "log",
    "profile",
    "set_log_file",
    "start",
    "stop",
    "use_registry",
]
__version__ = "0.1.0"
