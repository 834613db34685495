from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from spinview.core.pins import Pin

# Key under which a host configuration file nests the viewer options.
VIEWER_SECTION = "viewer"


class ViewerConfig(BaseModel):
    """Viewer options. Accepts both camelCase keys and snake_case names.

    `images` is either an explicit list of image references or "numbered",
    in which case `location`, `format` and `count` describe the sequence.
    `autoplay_speed` is the autoplay period in milliseconds.
    """

    model_config = ConfigDict(extra="allow", alias_generator=to_camel, populate_by_name=True)

    images: list[str] | Literal["numbered"] | None = "numbered"
    format: str | None = None
    location: str | None = "./images"
    count: int | None = None
    pins: list[Pin] = Field(default_factory=list)

    draggable: bool = True
    hint_on_startup: bool = False
    hint_text: str | None = None
    autoplay: bool = False
    autoplay_speed: float = Field(default=50, gt=0)
    stop_autoplay_on_click: bool = False
    stop_autoplay_on_mouse_enter: bool = False
    resume_autoplay_on_mouse_leave: bool = False
    touch: bool = True
    mousewheel: bool = False
    inverse: bool = False
    drag_interval: int = Field(default=1, ge=1)
    touch_drag_interval: int = Field(default=2, ge=1)
    mouseleave_detect: bool = False
    show_control_bar: bool = False

    @property
    def frame_count(self) -> int:
        if isinstance(self.images, list):
            return len(self.images)
        return self.count or 0

    @staticmethod
    def read_options(path: str | Path) -> dict[str, Any]:
        """Raw viewer options from a JSON file, unwrapping a `viewer` section if present."""
        with open(path, "r") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a JSON object")
        section = data.get(VIEWER_SECTION, data)
        if not isinstance(section, dict):
            raise ValueError(f"{path}: '{VIEWER_SECTION}' must be a JSON object")
        return section

    @classmethod
    def from_json(cls, path: str | Path) -> ViewerConfig:
        return cls.model_validate(cls.read_options(path))

    def save_json(self, path: str | Path) -> None:
        """Writes the options under a `viewer` section, camelCase keys."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump({VIEWER_SECTION: self.model_dump(mode="json", by_alias=True)}, f, indent=4)
