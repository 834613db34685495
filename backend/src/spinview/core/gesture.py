from __future__ import annotations

import math
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class PointerKind(Enum):
    MOUSE = "mouse"
    TOUCH = "touch"


class Tick(Enum):
    NEXT = "next"
    PREV = "prev"


@dataclass(frozen=True)
class PointerEvent:
    """Raw pointer position in host coordinates."""

    x: float
    y: float
    kind: PointerKind = PointerKind.MOUSE


class MoveBuffer:
    """The two most recent drag-axis coordinates."""

    SIZE = 2

    def __init__(self) -> None:
        self._samples: deque[float] = deque(maxlen=self.SIZE)

    def push(self, coord: float) -> None:
        self._samples.append(coord)

    def reset(self) -> None:
        self._samples.clear()

    @property
    def full(self) -> bool:
        return len(self._samples) == self.SIZE

    @property
    def samples(self) -> tuple[float, ...]:
        return tuple(self._samples)

    def __len__(self) -> int:
        return len(self._samples)


class GestureInterpreter:
    """Turns horizontal pointer motion into discrete next/prev ticks.

    Motion is quantized: a sample only ticks when its coordinate, measured
    from the viewer's left edge, is an exact multiple of the active interval.
    Moving left ticks forward, moving right ticks backward.
    """

    def __init__(
        self,
        *,
        on_next: Callable[[], object],
        on_prev: Callable[[], object],
        drag_interval: int = 1,
        touch_drag_interval: int = 2,
    ) -> None:
        self._on_next = on_next
        self._on_prev = on_prev
        self._intervals = {
            PointerKind.MOUSE: drag_interval,
            PointerKind.TOUCH: touch_drag_interval,
        }
        self.buffer = MoveBuffer()

    def interval_for(self, kind: PointerKind) -> int:
        return self._intervals[kind]

    def feed(self, event: PointerEvent, origin_x: float = 0.0) -> Tick | None:
        # Touch positions snap to whole pixels, halves rounding up.
        event_x = math.floor(event.x + 0.5) if event.kind is PointerKind.TOUCH else event.x
        coord = event_x - origin_x
        self.buffer.push(coord)

        if not self.buffer.full or coord % self.interval_for(event.kind) != 0:
            return None
        old_move, new_move = self.buffer.samples
        if new_move < old_move:
            self._on_next()
            return Tick.NEXT
        if new_move > old_move:
            self._on_prev()
            return Tick.PREV
        return None

    def reset(self) -> None:
        self.buffer.reset()
