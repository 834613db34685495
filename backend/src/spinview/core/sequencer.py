from __future__ import annotations

from spinview.core.channel import Channel
from spinview.core.events import FrameChangeEvent, NextFrameEvent, PrevFrameEvent, ViewerEvent


class FrameSequencer:
    """Current frame index over a fixed-length sequence, wrapping at both ends."""

    def __init__(self, frame_count: int, channel: Channel[ViewerEvent], *, start_index: int = 0) -> None:
        if frame_count < 1:
            raise ValueError(f"frame_count must be >= 1, got {frame_count}")
        if not 0 <= start_index < frame_count:
            raise ValueError(f"start_index {start_index} outside [0, {frame_count})")
        self._frame_count = frame_count
        self._index = start_index
        self._channel = channel

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def index(self) -> int:
        return self._index

    def advance(self) -> int:
        self._index = (self._index + 1) % self._frame_count
        self._channel.send(NextFrameEvent())
        self._channel.send(FrameChangeEvent(self._index))
        return self._index

    def retreat(self) -> int:
        self._index = (self._index - 1) % self._frame_count
        self._channel.send(PrevFrameEvent())
        self._channel.send(FrameChangeEvent(self._index))
        return self._index
