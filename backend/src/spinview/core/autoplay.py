from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from spinview.core.component import Component

logger = logging.getLogger(__name__)


class AutoplayScheduler(Component):
    """Calls `on_tick` every `period_ms` milliseconds while running.

    Ticks run under `lock`, the same lock that guards host input, so a timer
    tick never interleaves with a gesture. A tick whose run has been stopped
    in the meantime is dropped.
    """

    def __init__(
        self,
        *,
        period_ms: float,
        on_tick: Callable[[], object],
        lock: threading.RLock | None = None,
    ) -> None:
        super().__init__()
        self._period = period_ms / 1000.0
        self._on_tick = on_tick
        self._lock = lock or threading.RLock()
        self._tick_count = 0

    @property
    def period_ms(self) -> float:
        return self._period * 1000.0

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def tick(self) -> bool:
        """Fire one scheduled tick now. No-op unless running."""
        with self._lock:
            if not self.is_running:
                return False
            self._tick_count += 1
            self._on_tick()
            return True

    def run(self, stop_event: threading.Event) -> None:
        logger.debug(f"Autoplay timer started, period {self.period_ms:g}ms")
        next_time = time.monotonic() + self._period
        while not stop_event.wait(max(0.0, next_time - time.monotonic())):
            with self._lock:
                if stop_event.is_set():
                    break
                self._tick_count += 1
                self._on_tick()

            next_time += self._period
            if next_time < time.monotonic():
                next_time = time.monotonic()
        logger.debug("Autoplay timer stopped")
