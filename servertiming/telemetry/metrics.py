"""Block timer bound to a TimingRegistry."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Optional

if TYPE_CHECKING:  # pragma: no cover
    from ..registry import TimingRegistry

Mode = Optional[Literal["profile", "log"]]


@dataclass
class Timer:
    """Bracket a block with the registry toggle matching ``mode``.

    ``mode="profile"`` emits a header, ``mode="log"`` writes the log sink,
    ``None`` only updates the accumulator. ``elapsed`` holds milliseconds
    once the block exits.
    """

    registry: "TimingRegistry"
    name: str
    mode: Mode = "profile"
    elapsed: float = 0.0

    def __enter__(self) -> "Timer":
        # Entering always starts the metric, even if it is already running.
        if self.mode == "log" and not self.registry.is_running(self.name):
            self.registry.log(self.name)
        else:
            self.registry.start(self.name)
        return self

    def __exit__(self, exc_type, exc, tb):  # noqa: ANN001, ANN201
        if self.mode == "profile":
            self.elapsed = self.registry.profile(self.name) or 0.0
        elif self.mode == "log":
            self.elapsed = self.registry.log(self.name) or 0.0
        else:
            self.elapsed = self.registry.stop(self.name)
        return False
