"""Timing registry: named timers with per-metric running totals.

Usage::

    timing = TimingRegistry()
    timing.profile("db")     # starts "db"
    ...                      # work being measured
    timing.profile("db")     # stops "db", emits a Server-Timing header

``log`` is the same toggle writing to a log file instead of a header.
Each registry belongs to a single logical execution context (one request,
one worker); it does no locking of its own.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from . import locator as _locator
from .config import Settings
from .core.errors import UnbalancedTimerError
from .core.schemas import Snapshot
from .sinks import (
    HEADER_NAME,
    HeaderCollector,
    HeaderSink,
    LogTarget,
    format_header_value,
    format_start_line,
    format_stop_line,
)
from .telemetry.logging import get_logger
from .telemetry.metrics import Mode, Timer

Observer = Callable[[str, float], None]

_log = get_logger("servertiming.registry")


@dataclass
class MetricTotals:
    calls: int = 0
    total_ms: float = 0.0
    first_start: float = 0.0


class TimingRegistry:
    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.perf_counter,
        header_sink: Optional[HeaderSink] = None,
        locator: Optional[_locator.LogLocator] = None,
        log_target: Optional[LogTarget] = None,
        log_file: Optional[str] = None,
        debug: bool = True,
        header_precision: int = 3,
        observers: Iterable[Observer] = (),
    ) -> None:
        self._clock = clock
        self.header_sink: HeaderSink = header_sink if header_sink is not None else HeaderCollector()
        self.log_target = log_target if log_target is not None else LogTarget(locator)
        self.debug = debug
        self.header_precision = header_precision
        self.observers = list(observers)
        self._timers: Dict[str, float] = {}
        self._totals: Dict[str, MetricTotals] = {}
        if log_file is not None:
            self.set_log_file(log_file)

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "TimingRegistry":  # noqa: ANN003
        """Build a registry from :class:`Settings`; ``kwargs`` override."""
        observers = list(kwargs.pop("observers", ()))
        if settings.prometheus:
            from .telemetry.prom import PrometheusObserver

            observers.append(PrometheusObserver())
        if "log_target" not in kwargs:
            kwargs.setdefault("locator", _locator.PathListLocator(settings.log_candidates))
            kwargs.setdefault("log_file", settings.log_file)
        kwargs.setdefault("debug", settings.debug)
        kwargs.setdefault("header_precision", settings.header_precision)
        return cls(observers=observers, **kwargs)

    def child(
        self, *, header_sink: HeaderSink, header_precision: Optional[int] = None
    ) -> "TimingRegistry":
        """New registry with its own timers and totals.

        The log target, clock, debug flag and observers are shared with
        ``self``, so an explicit or discovered log file stays in effect.
        """
        return TimingRegistry(
            clock=self._clock,
            header_sink=header_sink,
            log_target=self.log_target,
            debug=self.debug,
            header_precision=self.header_precision if header_precision is None else header_precision,
            observers=self.observers,
        )

    # -- primitives -------------------------------------------------------

    def start(self, name: str) -> None:
        """Start (or restart) the timer for ``name``.

        Starting a metric that is already running discards the earlier
        pending start; the accumulator is left untouched.
        """
        if not name:
            raise ValueError("metric name must be a non-empty string")
        now = self._clock()
        self._timers[name] = now
        if name not in self._totals:
            self._totals[name] = MetricTotals(first_start=now)
        _log.debug("start %s", name)

    def stop(self, name: str) -> float:
        """Stop ``name`` and return the elapsed time in milliseconds.

        Raises :class:`UnbalancedTimerError` if ``name`` is not running; the
        registry is not modified in that case.
        """
        try:
            started = self._timers.pop(name)
        except KeyError:
            raise UnbalancedTimerError(name) from None
        elapsed_ms = max(0.0, (self._clock() - started) * 1000.0)
        totals = self._totals[name]
        totals.calls += 1
        totals.total_ms += elapsed_ms
        _log.debug("stop %s %.3fms (calls=%d)", name, elapsed_ms, totals.calls)
        for observer in self.observers:
            observer(name, elapsed_ms)
        return elapsed_ms

    def is_running(self, name: str) -> bool:
        return name in self._timers

    # -- toggles ----------------------------------------------------------

    def profile(self, name: str) -> Optional[float]:
        """Toggle ``name``; on stop, emit one ``Server-Timing`` header.

        Returns the elapsed milliseconds when the call stopped the timer,
        ``None`` when it started it.
        """
        if not self.is_running(name):
            self.start(name)
            return None
        elapsed_ms = self.stop(name)
        self.header_sink.send(
            HEADER_NAME, format_header_value(name, elapsed_ms, self.header_precision)
        )
        return elapsed_ms

    def log(self, name: str, debug: Optional[bool] = None) -> Optional[float]:
        """Toggle ``name`` and record the event in the log sink.

        The start event is written only when ``debug`` is true (defaults to
        the registry setting). Without a usable sink nothing is written.
        """
        if not self.is_running(name):
            if self.debug if debug is None else debug:
                self._write_log(format_start_line(name))
            self.start(name)
            return None
        elapsed_ms = self.stop(name)
        totals = self._totals[name]
        self._write_log(format_stop_line(name, elapsed_ms, totals.calls, totals.total_ms))
        return elapsed_ms

    def measure(self, name: str, mode: Mode = "profile") -> Timer:
        """Context manager bracketing a block; see :class:`Timer`."""
        return Timer(self, name, mode)

    # -- log sink ---------------------------------------------------------

    def set_log_file(self, path: str) -> None:
        """Use ``path`` as the log sink from now on.

        The file must already exist and be writable; otherwise a
        :class:`ConfigurationError` is raised and the current sink is kept.
        """
        self.log_target.set_file(path)

    @property
    def log_file(self) -> Optional[str]:
        return self.log_target.path

    @property
    def locator(self) -> _locator.LogLocator:
        return self.log_target.locator

    def _write_log(self, line: str) -> None:
        self.log_target.write(line)

    # -- inspection -------------------------------------------------------

    def totals(self, name: str) -> Optional[MetricTotals]:
        return self._totals.get(name)

    def snapshot(self) -> Snapshot:
        return {
            name: {"calls": t.calls, "total_ms": t.total_ms}
            for name, t in self._totals.items()
        }

    def reset(self) -> None:
        """Forget pending timers and totals; the log sink is kept."""
        self._timers.clear()
        self._totals.clear()


__all__ = ["MetricTotals", "TimingRegistry"]
