from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from spinview.core.utils import uid

logger = logging.getLogger(__name__)

# Normalized pin coordinates keep six decimal digits.
COORD_PRECISION = 6


def format_coord(value: float) -> str:
    return f"{value:.{COORD_PRECISION}f}"


class Pin(BaseModel):
    """An annotation marker bound to one frame.

    `x` and `y` are fractions of the viewer's rendered width and height at
    capture time, stored as fixed six-decimal strings.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    frame_id: int = Field(alias="frameId")
    x: str
    y: str

    @field_validator("x", "y", mode="before")
    @classmethod
    def _normalize_coord(cls, value: object) -> object:
        # Seeded pins may carry plain numbers.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return format_coord(value)
        return value

    def position(self, width: float, height: float) -> tuple[float, float]:
        """Pixel position of the marker inside a viewer of the given size."""
        return float(self.x) * width, float(self.y) * height


class PinStore:
    """Ordered pin collection. Mutations are accepted only while recording."""

    def __init__(self, pins: Iterable[Pin] = ()) -> None:
        self._pins: list[Pin] = list(pins)
        self._recording = False

    @property
    def recording(self) -> bool:
        return self._recording

    def set_recording(self, active: bool) -> None:
        self._recording = active

    @property
    def pins(self) -> list[Pin]:
        """Copy of the collection in insertion order."""
        return list(self._pins)

    def __len__(self) -> int:
        return len(self._pins)

    def __iter__(self):
        return iter(list(self._pins))

    def get(self, pin_id: str) -> Pin | None:
        for pin in self._pins:
            if pin.id == pin_id:
                return pin
        return None

    def pins_for_frame(self, frame_id: int) -> list[Pin]:
        return [pin for pin in self._pins if pin.frame_id == frame_id]

    def add_pin(self, frame_id: int, x: float, y: float) -> Pin | None:
        if not self._recording:
            logger.debug("Ignoring add_pin outside recording mode")
            return None
        pin = Pin(id=self._new_id(), frame_id=frame_id, x=format_coord(x), y=format_coord(y))
        self._pins.append(pin)
        return pin

    def remove_pin(self, pin_id: str) -> Pin | None:
        if not self._recording:
            logger.debug("Ignoring remove_pin outside recording mode")
            return None
        pin = self.get(pin_id)
        if pin is None:
            logger.debug(f"No pin with id {pin_id}")
            return None
        self._pins = [p for p in self._pins if p.id != pin_id]
        return pin

    def _new_id(self) -> str:
        while True:
            pin_id = uid()
            if self.get(pin_id) is None:
                return pin_id
