from __future__ import annotations

from spinview.core.controller import ViewerController
from spinview.core.gesture import PointerEvent, PointerKind
from spinview.core.pins import Pin
from spinview.api.viewer.dto import PointerRequest


def move(viewer: ViewerController, direction: str) -> int:
    if direction == "next":
        viewer.surface.next()
    else:
        viewer.surface.prev()
    return viewer.index


def find_pin(viewer: ViewerController, pin_id: str) -> Pin | None:
    return viewer.pins.get(pin_id)


def click(viewer: ViewerController, req: PointerRequest) -> Pin | None:
    return viewer.click(PointerEvent(x=req.x, y=req.y, kind=PointerKind(req.kind)))
