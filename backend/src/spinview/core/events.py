from __future__ import annotations

import threading
import time
from abc import ABC
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict

from spinview.core.pins import Pin
from spinview.core.utils import obj_id

_MAX_EVENTS = 100


class EventRegistry:
    """Bounded history of emitted viewer events, oldest first.

    Backs the HTTP polling and SSE routes, which ask for everything newer
    than the last id they saw.
    """

    def __init__(self, maxlen: int = _MAX_EVENTS) -> None:
        self._events: deque[ViewerEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def register(self, event: ViewerEvent) -> None:
        with self._lock:
            self._events.append(event)

    def since(self, event_id: int) -> list[ViewerEvent]:
        with self._lock:
            return [e for e in self._events if e.id > event_id]


_event_registry = EventRegistry()


@dataclass(frozen=True)
class ViewerEvent(ABC):
    """Base class for every notification the viewer emits.

    Parameters:
        pts: Emission timestamp in nanoseconds.
        id: Monotonic identifier, also the emission order.
    """

    event_type = "event"

    pts: int = field(default_factory=time.time_ns, kw_only=True)
    id: int = field(default_factory=obj_id, kw_only=True)

    def __post_init__(self):
        _event_registry.register(self)

    def payload(self) -> Dict[str, Any]:
        return {}

    def __str__(self):
        return f"{type(self).__name__}(id={self.id}, pts={self.pts})"


@dataclass(frozen=True)
class FrameChangeEvent(ViewerEvent):
    event_type = "frame_change"

    index: int

    def payload(self) -> Dict[str, Any]:
        return {"index": self.index}

    def __str__(self):
        return f"FrameChangeEvent(id={self.id}, index={self.index})"


@dataclass(frozen=True)
class NextFrameEvent(ViewerEvent):
    event_type = "next_frame"


@dataclass(frozen=True)
class PrevFrameEvent(ViewerEvent):
    event_type = "prev_frame"


@dataclass(frozen=True)
class NextMoveEvent(ViewerEvent):
    event_type = "next_move"


@dataclass(frozen=True)
class PrevMoveEvent(ViewerEvent):
    event_type = "prev_move"


@dataclass(frozen=True)
class DragStartEvent(ViewerEvent):
    event_type = "drag_start"


@dataclass(frozen=True)
class DragEndEvent(ViewerEvent):
    event_type = "drag_end"


@dataclass(frozen=True)
class AutoplayStartEvent(ViewerEvent):
    event_type = "autoplay_start"


@dataclass(frozen=True)
class AutoplayStopEvent(ViewerEvent):
    event_type = "autoplay_stop"


@dataclass(frozen=True)
class HintHideEvent(ViewerEvent):
    event_type = "hint_hide"


@dataclass(frozen=True)
class _PinsEvent(ViewerEvent):
    """Carries the pin collection as it was when the event fired."""

    pins: tuple[Pin, ...]

    def payload(self) -> Dict[str, Any]:
        return {"pins": [p.model_dump(by_alias=True) for p in self.pins]}

    def __str__(self):
        return f"{type(self).__name__}(id={self.id}, pins={len(self.pins)})"


@dataclass(frozen=True)
class RecordStartEvent(_PinsEvent):
    event_type = "record_start"


@dataclass(frozen=True)
class RecordStopEvent(_PinsEvent):
    event_type = "record_stop"


@dataclass(frozen=True)
class PinClickEvent(ViewerEvent):
    event_type = "pin_click"

    pin: Pin

    def payload(self) -> Dict[str, Any]:
        return {"pin": self.pin.model_dump(by_alias=True)}


def get_event_registry() -> EventRegistry:
    """Get the global event registry instance."""
    return _event_registry
