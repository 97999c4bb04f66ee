"""Environment parsing helpers.

Small helpers to consistently parse env vars with sane defaults.
"""
from __future__ import annotations

from typing import Iterable, List, Optional
import os


def env_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None or not val.strip():
        return bool(default)
    return val.strip() in ("1", "true", "True", "YES", "yes", "on", "On")


def env_int(name: str, default: int, minimum: int | None = None) -> int:
    try:
        v = int(os.getenv(name, str(default)))
    except ValueError:
        v = int(default)
    if minimum is not None:
        v = max(minimum, v)
    return v


def env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.getenv(name)
    if val is None:
        return default
    val = val.strip()
    return val or default


def env_list_path(name: str, default: Iterable[str]) -> List[str]:
    """Split an ``os.pathsep`` separated list, dropping empty entries."""
    s = os.getenv(name, "")
    if not s:
        return list(default)
    out = [tok.strip() for tok in s.split(os.pathsep) if tok.strip()]
    return out or list(default)
