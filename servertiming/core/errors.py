"""Common exceptions for the servertiming library."""
from __future__ import annotations


class ServerTimingError(Exception):
    pass


class ConfigurationError(ServerTimingError):
    """Raised when a log sink path is missing or not writable."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"invalid log file {path!r}: {reason}")
        self.path = path
        self.reason = reason


class UnbalancedTimerError(ServerTimingError):
    """Raised by ``stop`` when no matching ``start`` is pending."""

    def __init__(self, name: str) -> None:
        super().__init__(f"metric {name!r} was stopped without a pending start")
        self.name = name
