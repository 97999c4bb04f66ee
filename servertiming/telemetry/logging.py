from __future__ import annotations

"""Diagnostic logging for the servertiming package itself.

This is not the timing log sink; it reports sink discovery, warnings and
per-timer debug records under the ``servertiming`` logger hierarchy.

Environment variables:
- SERVERTIMING_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR. When set, the
  ``servertiming`` logger gets that level and its own stderr handler;
  otherwise records simply propagate to the host application's logging.
"""

import logging
import os

ROOT_LOGGER = "servertiming"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_CONFIGURED = False


def _configure_once() -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return
    _CONFIGURED = True
    level = os.getenv("SERVERTIMING_LOG_LEVEL")
    if not level:
        return
    lvl = getattr(logging, level.strip().upper(), None)
    if not isinstance(lvl, int):
        lvl = logging.INFO
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(lvl)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    _configure_once()
    return logging.getLogger(name)
