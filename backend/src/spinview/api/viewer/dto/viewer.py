from __future__ import annotations

from pydantic import BaseModel


class ToggleRequest(BaseModel):
    state: bool


class PointerRequest(BaseModel):
    x: float
    y: float
    kind: str = "mouse"


class MoveResponse(BaseModel):
    index: int
