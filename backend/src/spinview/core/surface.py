from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spinview.core.controller import ViewerController


class ControlSurface:
    """The four operations an embedding application (or a control bar) may drive."""

    def __init__(self, controller: ViewerController) -> None:
        self._controller = controller

    def next(self) -> None:
        self._controller.next_move()

    def prev(self) -> None:
        self._controller.prev_move()

    def toggle_autoplay(self, state: bool) -> None:
        self._controller.toggle_autoplay(state)

    def toggle_recording(self, state: bool) -> None:
        self._controller.toggle_recording(state)
