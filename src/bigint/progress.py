# src/bigint/progress.py
from __future__ import annotations

import sys
import time
from typing import TextIO


class Progress:
    """
    One-line progress bar for long verify runs, redrawn in place on stderr.
    Disabled instances do nothing, so callers never need to branch.
    """

    BAR_LEN = 24
    THROTTLE_S = 0.05
    SPIN = "|/-\\"

    def __init__(self, total: int, *, enabled: bool = True, stream: TextIO | None = None):
        self.total = max(1, int(total))
        self.enabled = enabled
        self.stream = stream or sys.stderr
        self.started = time.perf_counter()
        self._last_draw = 0.0
        self._tick = 0
        self._width = 0

    def update(self, done: int, label: str = "") -> None:
        if not self.enabled:
            return
        now = time.perf_counter()
        # always draw the final frame
        if done < self.total and now - self._last_draw < self.THROTTLE_S:
            return
        self._last_draw = now
        self._tick += 1

        frac = min(max(done / self.total, 0.0), 1.0)
        fill = int(frac * self.BAR_LEN)
        bar = "#" * fill + "-" * (self.BAR_LEN - fill)
        elapsed = now - self.started
        line = f"[{self.SPIN[self._tick % len(self.SPIN)]}] [{bar}] {int(frac * 100):3d}% {elapsed:6.1f}s  {label[:40]}"
        self._width = max(self._width, len(line))
        self.stream.write("\r" + line.ljust(self._width))
        self.stream.flush()

    def done(self) -> None:
        if not self.enabled or not self._width:
            return
        self.stream.write("\r" + " " * self._width + "\r")
        self.stream.flush()
