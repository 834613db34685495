from __future__ import annotations

import pytest

from spinview.core.config import ViewerConfig
from spinview.core.controller import ViewerController
from spinview.core.events import ViewerEvent

# Autoplay period long enough that the timer thread never fires during a test;
# tests drive ticks explicitly through AutoplayScheduler.tick().
IDLE_SPEED = 60_000


class EventRecorder:
    """Collects every event a viewer emits, in order."""

    def __init__(self) -> None:
        self.events: list[ViewerEvent] = []

    def __call__(self, event: ViewerEvent) -> None:
        self.events.append(event)

    @property
    def types(self) -> list[str]:
        return [e.event_type for e in self.events]

    def of(self, cls: type[ViewerEvent]) -> list[ViewerEvent]:
        return [e for e in self.events if isinstance(e, cls)]

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def make_viewer(recorder):
    viewers: list[ViewerController] = []

    def factory(frames: int = 8, **options) -> ViewerController:
        options.setdefault("autoplay_speed", IDLE_SPEED)
        config = ViewerConfig(images=[f"img/{n}.png" for n in range(1, frames + 1)], **options)
        viewer = ViewerController(config, listeners=[recorder])
        viewers.append(viewer)
        return viewer

    yield factory
    for viewer in viewers:
        viewer.close()
