from __future__ import annotations

import dataclasses
import functools
import logging
import threading
from collections.abc import Callable, Iterable
from typing import Any

from pydantic import BaseModel, ValidationError

from spinview.core.autoplay import AutoplayScheduler
from spinview.core.channel import Channel, Listener
from spinview.core.component import ComponentSnapshot
from spinview.core.config import ViewerConfig
from spinview.core.events import (
    AutoplayStartEvent,
    AutoplayStopEvent,
    DragEndEvent,
    DragStartEvent,
    HintHideEvent,
    NextMoveEvent,
    PinClickEvent,
    PrevMoveEvent,
    RecordStartEvent,
    RecordStopEvent,
    ViewerEvent,
)
from spinview.core.gesture import GestureInterpreter, PointerEvent, PointerKind
from spinview.core.images import ViewerConfigError, resolve_images
from spinview.core.pins import Pin, PinStore
from spinview.core.sequencer import FrameSequencer
from spinview.core.surface import ControlSurface

logger = logging.getLogger(__name__)


class ViewerGeometry(BaseModel):
    """Rendered viewer box in host coordinates."""

    left: float = 0.0
    top: float = 0.0
    width: float = 0.0
    height: float = 0.0


class ViewerSnapshot(BaseModel):
    index: int
    frame_count: int
    current_image: str
    draggable: bool
    is_dragging: bool
    is_autoplay_running: bool
    is_recording: bool
    hint_visible: bool
    hint_text: str | None
    show_control_bar: bool
    pins: list[Pin]
    visible_pins: list[Pin]
    autoplay: ComponentSnapshot


def _serialized[**P, R](method: Callable[P, R]) -> Callable[P, R | None]:
    """Run a controller operation under the controller lock; ignore it once closed."""

    @functools.wraps(method)
    def wrapper(self: ViewerController, *args: Any, **kwargs: Any) -> Any:
        with self._lock:
            if self._closed:
                logger.debug(f"Ignoring {method.__name__} on a closed viewer")
                return None
            return method(self, *args, **kwargs)

    return wrapper


class ViewerController:
    """Interaction state machine for one viewer instance.

    Owns the frame sequencer, gesture interpreter, autoplay scheduler and pin
    store, and routes host input to them according to the mode flags.
    Recording takes priority over dragging: while recording, mouse input
    places pins instead of rotating.

    All operations are serialized on one re-entrant lock, shared with the
    autoplay timer thread. Listeners run synchronously inside that lock and
    may call back into the controller.
    """

    def __init__(
        self,
        config: ViewerConfig | None = None,
        *,
        listeners: Iterable[Listener[ViewerEvent]] = (),
        start_index: int = 0,
    ) -> None:
        self.config = config or ViewerConfig()
        self.images = resolve_images(self.config)

        self._lock = threading.RLock()
        self._closed = False
        self._is_dragging = False
        self._hint_visible = self.config.hint_on_startup
        self.geometry = ViewerGeometry()

        self.events: Channel[ViewerEvent] = Channel(name="viewer_events")
        for listener in listeners:
            self.events.subscribe(listener)

        self.sequencer = FrameSequencer(len(self.images), self.events, start_index=start_index)
        self.pins = PinStore(self.config.pins)
        self.gesture = GestureInterpreter(
            on_next=self.next_move,
            on_prev=self.prev_move,
            drag_interval=self.config.drag_interval,
            touch_drag_interval=self.config.touch_drag_interval,
        )
        self.autoplay = AutoplayScheduler(
            period_ms=self.config.autoplay_speed,
            on_tick=self.next_move,
            lock=self._lock,
        )
        self.surface = ControlSurface(self)

        if self.config.autoplay:
            self.toggle_autoplay(True)

    @property
    def index(self) -> int:
        return self.sequencer.index

    @property
    def frame_count(self) -> int:
        return self.sequencer.frame_count

    @property
    def current_image(self) -> str:
        return self.images[self.sequencer.index]

    @property
    def draggable(self) -> bool:
        return self.config.draggable and not self.pins.recording

    @property
    def is_dragging(self) -> bool:
        return self._is_dragging

    @property
    def is_autoplay_running(self) -> bool:
        return self.autoplay.is_running

    @property
    def is_recording(self) -> bool:
        return self.pins.recording

    @property
    def hint_visible(self) -> bool:
        return self._hint_visible

    @property
    def closed(self) -> bool:
        return self._closed

    def visible_pins(self) -> list[Pin]:
        """Pins that belong to the frame currently shown."""
        return self.pins.pins_for_frame(self.sequencer.index)

    def snapshot(self) -> ViewerSnapshot:
        with self._lock:
            return ViewerSnapshot(
                index=self.index,
                frame_count=self.frame_count,
                current_image=self.current_image,
                draggable=self.draggable,
                is_dragging=self._is_dragging,
                is_autoplay_running=self.is_autoplay_running,
                is_recording=self.is_recording,
                hint_visible=self._hint_visible,
                hint_text=self.config.hint_text,
                show_control_bar=self.config.show_control_bar,
                pins=self.pins.pins,
                visible_pins=self.visible_pins(),
                autoplay=self.autoplay.snapshot(),
            )

    def subscribe(self, listener: Listener[ViewerEvent], *types: type[ViewerEvent]) -> Callable[[], None]:
        return self.events.subscribe(listener, *types)

    @_serialized
    def set_geometry(self, geometry: ViewerGeometry) -> None:
        self.geometry = geometry

    @_serialized
    def next_move(self) -> int:
        self.events.send(NextMoveEvent())
        return self.sequencer.retreat() if self.config.inverse else self.sequencer.advance()

    @_serialized
    def prev_move(self) -> int:
        self.events.send(PrevMoveEvent())
        return self.sequencer.advance() if self.config.inverse else self.sequencer.retreat()

    @_serialized
    def toggle_autoplay(self, state: bool) -> None:
        if state == self.autoplay.is_running:
            logger.debug(f"Autoplay already {'running' if state else 'stopped'}")
            return
        if state:
            self.autoplay.start()
            logger.info(f"Autoplay started every {self.autoplay.period_ms:g}ms")
            self.events.send(AutoplayStartEvent())
        else:
            self.autoplay.stop()
            logger.info("Autoplay stopped")
            self.events.send(AutoplayStopEvent())

    @_serialized
    def toggle_recording(self, state: bool) -> None:
        self.pins.set_recording(state)
        if state:
            # Recording disables dragging; finish any drag in progress.
            if self._is_dragging:
                self._end_drag()
            self.gesture.reset()
            logger.info(f"Recording started with {len(self.pins)} pins")
            self.events.send(RecordStartEvent(tuple(self.pins.pins)))
        else:
            logger.info(f"Recording stopped with {len(self.pins)} pins")
            self.events.send(RecordStopEvent(tuple(self.pins.pins)))

    @_serialized
    def hide_hint(self) -> None:
        if not self._hint_visible:
            return
        self._hint_visible = False
        self.events.send(HintHideEvent())

    @_serialized
    def add_pin(self, frame_id: int, x: float, y: float) -> Pin | None:
        return self.pins.add_pin(frame_id, x, y)

    @_serialized
    def remove_pin(self, pin_id: str) -> Pin | None:
        return self.pins.remove_pin(pin_id)

    @_serialized
    def mouse_down(self, event: PointerEvent) -> None:
        if self.draggable:
            self._start_drag()
            self._rotate(event)
        self._stop_autoplay_on_click()

    @_serialized
    def mouse_move(self, event: PointerEvent) -> None:
        if self.draggable and self._is_dragging:
            self._rotate(event)

    @_serialized
    def mouse_up(self, event: PointerEvent | None = None) -> None:
        if self.draggable:
            self._end_drag()
            self.gesture.reset()

    @_serialized
    def mouse_enter(self) -> None:
        if self.autoplay.is_running and self.config.stop_autoplay_on_mouse_enter:
            self.toggle_autoplay(False)

    @_serialized
    def mouse_leave(self) -> None:
        if self.draggable:
            self.gesture.reset()
        self._resume_autoplay_on_leave()
        if self.config.mouseleave_detect:
            self._end_drag()
            self.gesture.reset()

    @_serialized
    def wheel(self, delta_y: float) -> None:
        if not self.config.mousewheel:
            return
        # Only a downward scroll counts as forward; zero and upward scroll retreat.
        if delta_y > 0:
            self.next_move()
        else:
            self.prev_move()

    @_serialized
    def touch_start(self, event: PointerEvent) -> None:
        if self.config.touch:
            self._start_drag()
            self._rotate(_as_touch(event))
        self._stop_autoplay_on_click()

    @_serialized
    def touch_move(self, event: PointerEvent) -> None:
        if self.config.touch:
            self._rotate(_as_touch(event))

    @_serialized
    def touch_end(self, event: PointerEvent | None = None) -> None:
        if self.config.touch:
            self._end_drag()
            self.gesture.reset()
        self._resume_autoplay_on_leave()

    @_serialized
    def click(self, event: PointerEvent) -> Pin | None:
        if not self.pins.recording:
            return None
        geometry = self.geometry
        if geometry.width <= 0 or geometry.height <= 0:
            logger.debug("Ignoring click: viewer geometry has no size")
            return None
        x = (event.x - geometry.left) / geometry.width
        y = (event.y - geometry.top) / geometry.height
        return self.pins.add_pin(self.sequencer.index, x, y)

    @_serialized
    def pin_click(self, pin: Pin) -> None:
        if not self.pins.recording:
            self.events.send(PinClickEvent(pin))

    @_serialized
    def pin_double_click(self, pin: Pin) -> Pin | None:
        if self.pins.recording:
            return self.pins.remove_pin(pin.id)
        return None

    def close(self, timeout: float | None = 1.0) -> None:
        """Idempotent. Tears down the autoplay timer and drops all listeners."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self.autoplay.stop()
            self._is_dragging = False
            self.gesture.reset()
            self.events.close()
            logger.info("Viewer closed")
        self.autoplay.join(timeout)

    def __enter__(self) -> ViewerController:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _rotate(self, event: PointerEvent) -> None:
        self.gesture.feed(event, self.geometry.left)

    def _start_drag(self) -> None:
        self._is_dragging = True
        self.events.send(DragStartEvent())

    def _end_drag(self) -> None:
        self._is_dragging = False
        self.events.send(DragEndEvent())

    def _stop_autoplay_on_click(self) -> None:
        if self.autoplay.is_running and self.config.stop_autoplay_on_click:
            self.toggle_autoplay(False)

    def _resume_autoplay_on_leave(self) -> None:
        if not self.autoplay.is_running and self.config.resume_autoplay_on_mouse_leave:
            self.toggle_autoplay(True)


def _as_touch(event: PointerEvent) -> PointerEvent:
    if event.kind is PointerKind.TOUCH:
        return event
    return dataclasses.replace(event, kind=PointerKind.TOUCH)


def create_viewer(config: ViewerConfig | dict[str, Any] | None = None, **kwargs: Any) -> ViewerController | None:
    """Build a viewer, or log the configuration problems and return None."""
    try:
        if isinstance(config, dict):
            config = ViewerConfig.model_validate(config)
        return ViewerController(config, **kwargs)
    except ValidationError as e:
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            logger.error(f"Invalid viewer option '{location}': {error['msg']}")
        return None
    except ViewerConfigError as e:
        for problem in e.problems:
            logger.error(problem)
        return None
