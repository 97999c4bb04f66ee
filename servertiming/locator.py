"""Log file discovery.

A locator picks the log sink the first time ``log`` needs one. The
default strategy walks a fixed, ordered list of well-known platform log
files and selects the first one that exists and is writable.
"""
from __future__ import annotations

import os
from typing import Iterable, List, Optional, Protocol

from .utils.env import env_list_path


DEFAULT_CANDIDATES: tuple[str, ...] = (
    "/var/log/servertiming.log",
    "/var/log/apache2/error.log",
    "/var/log/httpd/error_log",
    "/var/log/nginx/error.log",
    "/usr/local/var/log/servertiming.log",
    "/opt/homebrew/var/log/servertiming.log",
)


class LogLocator(Protocol):
    def locate(self) -> Optional[str]:
        ...


def is_writable_file(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.W_OK)


class PathListLocator:
    """Return the first existing, writable path from ``candidates``."""

    def __init__(self, candidates: Iterable[str] = DEFAULT_CANDIDATES) -> None:
        self.candidates: List[str] = [str(c) for c in candidates]

    def locate(self) -> Optional[str]:
        for cand in self.candidates:
            if is_writable_file(cand):
                return cand
        return None

    def __repr__(self) -> str:
        return f"PathListLocator({self.candidates!r})"


def locator_from_env() -> PathListLocator:
    return PathListLocator(env_list_path("SERVERTIMING_LOG_CANDIDATES", DEFAULT_CANDIDATES))
