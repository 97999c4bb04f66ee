"""Registry bound to the current execution context.

Code deep in a call stack can time itself without threading a registry
through every signature::

    from servertiming import profile

    profile("render")
    ...
    profile("render")

The active registry comes from :func:`use_registry` (the ASGI middleware
binds one per request) or, outside any binding, from a process-wide
default built from the environment on first use.
"""
from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from .config import Settings
from .registry import TimingRegistry
from .sinks import LoggingHeaderSink

_CURRENT: ContextVar[Optional[TimingRegistry]] = ContextVar("servertiming_registry", default=None)
_DEFAULT: Optional[TimingRegistry] = None


def default_registry() -> TimingRegistry:
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = TimingRegistry.from_settings(Settings.from_env(), header_sink=LoggingHeaderSink())
    return _DEFAULT


def current_registry() -> TimingRegistry:
    reg = _CURRENT.get()
    return reg if reg is not None else default_registry()


@contextmanager
def use_registry(registry: TimingRegistry) -> Iterator[TimingRegistry]:
    token = _CURRENT.set(registry)
    try:
        yield registry
    finally:
        _CURRENT.reset(token)


def start(name: str) -> None:
    current_registry().start(name)


def stop(name: str) -> float:
    return current_registry().stop(name)


def profile(name: str) -> Optional[float]:
    return current_registry().profile(name)


def log(name: str, debug: Optional[bool] = None) -> Optional[float]:
    return current_registry().log(name, debug)


def set_log_file(path: str) -> None:
    current_registry().set_log_file(path)
