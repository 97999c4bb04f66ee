"""Output sinks for timing records.

Two destinations exist: response headers (``Server-Timing``) and a plain
log file. Both are deliberately thin; the registry owns the formatting
decisions through the helpers below.
"""
from __future__ import annotations

import os
import re
from typing import List, Optional, Protocol, Tuple

from . import locator as _locator
from .core.errors import ConfigurationError
from .telemetry.logging import get_logger

HEADER_NAME = "Server-Timing"
LOG_PRECISION = 5

_log = get_logger("servertiming.sinks")

_UNSAFE = re.compile(r"[^A-Za-z0-9_]+")
_UNSAFE_EDGES = re.compile(r"^[^A-Za-z0-9_]+|[^A-Za-z0-9_]+$")


def sanitize_metric_name(name: str) -> str:
    """Restrict ``name`` to letters, digits and underscores.

    Disallowed characters at either end are dropped, inner runs become a
    single ``_``. Underscores already in ``name`` are kept.

    >>> sanitize_metric_name("my metric!")
    'my_metric'
    >>> sanitize_metric_name("_total")
    '_total'
    """
    cleaned = _UNSAFE.sub("_", _UNSAFE_EDGES.sub("", name))
    return cleaned or "metric"


def format_header_value(name: str, duration_ms: float, precision: int = 3) -> str:
    token = sanitize_metric_name(name)
    return f"{token};dur={duration_ms:.{precision}f};desc={token}"


def format_start_line(name: str) -> str:
    return f"{HEADER_NAME}: {name} start"


def format_stop_line(name: str, duration_ms: float, calls: int, total_ms: float) -> str:
    return (
        f"{HEADER_NAME}: {name} - ({round(duration_ms, LOG_PRECISION)} ms - "
        f"called {calls} times, total time: {round(total_ms, LOG_PRECISION)} ms)"
    )


class HeaderSink(Protocol):
    def send(self, field: str, value: str) -> None:
        ...


class LogSink(Protocol):
    def write(self, line: str) -> None:
        ...


class HeaderCollector:
    """Collects outgoing header instances in emission order.

    Values of the same field are kept as separate entries; a transport
    must append them rather than merge them.
    """

    def __init__(self) -> None:
        self.headers: List[Tuple[str, str]] = []

    def send(self, field: str, value: str) -> None:
        self.headers.append((field, value))

    def values(self, field: str = HEADER_NAME) -> List[str]:
        wanted = field.lower()
        return [v for f, v in self.headers if f.lower() == wanted]

    def clear(self) -> None:
        self.headers.clear()

    def __len__(self) -> int:
        return len(self.headers)


class LogFileSink:
    """Append-only text file, one line per record."""

    def __init__(self, path: str) -> None:
        self.path = path

    def write(self, line: str) -> None:
        with open(self.path, "a", encoding="utf-8") as fh:
            fh.write(line.rstrip("\n") + "\n")

    def __repr__(self) -> str:
        return f"LogFileSink({self.path!r})"


class LoggingHeaderSink:
    """Header sink for code running outside any HTTP response.

    Values are reported at DEBUG level and not retained.
    """

    def __init__(self, logger_name: str = "servertiming.headers") -> None:
        self._logger = get_logger(logger_name)

    def send(self, field: str, value: str) -> None:
        self._logger.debug("%s: %s", field, value)


class LogTarget:
    """Where ``log`` writes: an explicit file or the locator's pick.

    One target may be shared by many registries (the process default and
    every per-request registry), so ``set_log_file`` and discovery happen
    once for all of them.
    """

    def __init__(self, locator: Optional[_locator.LogLocator] = None) -> None:
        self.locator = locator if locator is not None else _locator.PathListLocator()
        self._sink: Optional[LogSink] = None
        self._resolved = False

    @property
    def path(self) -> Optional[str]:
        return getattr(self._sink, "path", None)

    def set_file(self, path: str) -> None:
        path = str(path)
        if not os.path.exists(path):
            raise ConfigurationError(path, "does not exist")
        if not _locator.is_writable_file(path):
            raise ConfigurationError(path, "is not a writable file")
        self._sink = LogFileSink(path)
        self._resolved = True
        _log.info("log sink set to %s", path)

    def resolve(self) -> Optional[LogSink]:
        if not self._resolved:
            self._resolved = True
            path = self.locator.locate()
            if path is None:
                _log.warning("no writable log file found via %r; log() is disabled", self.locator)
            else:
                self._sink = LogFileSink(path)
                _log.info("log sink discovered at %s", path)
        return self._sink

    def write(self, line: str) -> None:
        sink = self.resolve()
        if sink is not None:
            sink.write(line)
