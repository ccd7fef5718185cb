# cityrun/utils/dt.py
from __future__ import annotations
from collections import deque

import cityrun.utils.settings as settings


class DtSmoother:
    """
    Smooth & clamp frame time (milliseconds) to reduce jitter and avoid
    spiral-of-death after a stall.

    Example:
        smoother = DtSmoother(max_ms=1000 / 15, window=8)
        while running:
            elapsed_ms = smoother(clock.tick(60))
            driver.step(elapsed_ms)
    """
    def __init__(self, *, max_ms: float = settings.MAX_FRAME_MS, window: int = settings.DT_SMOOTHING_WINDOW):
        self.max_ms = float(max_ms)
        self._win = max(1, int(window))
        self._buf: deque[float] = deque(maxlen=self._win)

    def __call__(self, elapsed_ms: float) -> float:
        elapsed_ms = max(0.0, min(self.max_ms, float(elapsed_ms)))  # clamp
        self._buf.append(elapsed_ms)
        return sum(self._buf) / len(self._buf)

    def reset(self) -> None:
        """Forget history, e.g. after a level transition or a pause."""
        self._buf.clear()
