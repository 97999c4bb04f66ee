"""Configuration helpers for servertiming.

Settings are read from ``SERVERTIMING_*`` environment variables.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .locator import DEFAULT_CANDIDATES
from .utils.env import env_bool, env_int, env_list_path, env_str


@dataclass(slots=True)
class Settings:
    log_file: Optional[str] = None
    log_candidates: List[str] = field(default_factory=lambda: list(DEFAULT_CANDIDATES))
    debug: bool = True
    header_precision: int = 3
    prometheus: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            log_file=env_str("SERVERTIMING_LOG_FILE"),
            log_candidates=env_list_path("SERVERTIMING_LOG_CANDIDATES", DEFAULT_CANDIDATES),
            debug=env_bool("SERVERTIMING_DEBUG", True),
            header_precision=env_int("SERVERTIMING_HEADER_PRECISION", 3, minimum=0),
            prometheus=env_bool("SERVERTIMING_PROMETHEUS", False),
        )
