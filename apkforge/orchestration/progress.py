"""
Build progress reporting.

Progress is a side channel: observers are plain synchronous callables
receiving ``(percent, message)`` at fixed checkpoints. A failing observer is
logged and otherwise ignored so it can never abort a build.
"""

from __future__ import annotations

from typing import Protocol

from ..core.logging import get_logger

logger = get_logger(__name__)


class ProgressObserver(Protocol):
    """Callable notified at build checkpoints."""

    def __call__(self, percent: int, message: str) -> None: ...


class ProgressReporter:
    """Forwards checkpoints to an optional observer."""

    def __init__(self, observer: ProgressObserver | None = None) -> None:
        self.observer = observer

    def report(self, percent: int, message: str) -> None:
        """Log a checkpoint and notify the observer."""
        logger.info("Build progress", percent=percent, message=message)
        if self.observer is None:
            return
        try:
            self.observer(percent, message)
        except Exception as e:
            logger.warning("Progress observer raised", percent=percent, error=str(e))


class ProgressRecorder:
    """Observer that keeps every checkpoint it receives."""

    def __init__(self) -> None:
        self.events: list[tuple[int, str]] = []

    def __call__(self, percent: int, message: str) -> None:
        self.events.append((percent, message))

    @property
    def last_percent(self) -> int:
        return self.events[-1][0] if self.events else 0
