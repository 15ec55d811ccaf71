"""Run timing: the elapsed-time accumulator and its start/end gate guard."""

from __future__ import annotations

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class RunTimer:
    """Start/stop accumulator fed by frame deltas."""

    def __init__(self) -> None:
        self.elapsed = 0.0
        self.running = False

    def start(self) -> None:
        self.elapsed = 0.0
        self.running = True
        logger.debug("Timer started")

    def stop(self) -> float:
        if self.running:
            self.running = False
            logger.info("Timer ended at: %.3f", self.elapsed)
        return self.elapsed

    def tick(self, delta: float) -> float:
        if self.running and delta > 0:
            self.elapsed += delta
        return self.elapsed


class RunGate:
    """Fires the timer's start and stop at most once per run."""

    def __init__(self, timer: RunTimer) -> None:
        self.timer = timer
        self.started = False
        self.finished = False

    def reset(self) -> None:
        self.started = False
        self.finished = False

    def enter_start(self) -> bool:
        if self.started:
            return False
        self.started = True
        self.timer.start()
        return True

    def enter_end(self) -> Optional[float]:
        """Final time the first time the end gate is crossed after a start."""

        if not self.started or self.finished:
            return None
        self.finished = True
        return self.timer.stop()


def format_elapsed(seconds: float) -> str:
    """``MM:SS.mmm`` as shown on the in-game timer."""

    total_ms = int(round(max(seconds, 0.0) * 1000))
    minutes, rest = divmod(total_ms, 60_000)
    secs, millis = divmod(rest, 1000)
    return f"{minutes:02d}:{secs:02d}.{millis:03d}"


__all__ = ["RunGate", "RunTimer", "format_elapsed"]
