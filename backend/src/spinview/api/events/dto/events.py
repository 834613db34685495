from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class EventSnapshot(BaseModel):
    id: int
    event_type: str
    pts: int
    payload: dict[str, Any]
    message: str  # __str__ representation


class EventsResponse(BaseModel):
    events: list[EventSnapshot]
    timestamp: float
