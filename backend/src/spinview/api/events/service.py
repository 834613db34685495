from __future__ import annotations

import time

from spinview.core.events import get_event_registry
from spinview.api.events.dto import EventSnapshot, EventsResponse


def collect(after: int = 0) -> EventsResponse:
    """Collect recent viewer events with an id greater than `after`."""
    registry = get_event_registry()
    events = registry.since(after)

    snapshots = [
        EventSnapshot(
            id=event.id,
            event_type=event.event_type,
            pts=event.pts,
            payload=event.payload(),
            message=str(event),
        )
        for event in events
    ]

    return EventsResponse(
        events=snapshots,
        timestamp=time.time(),
    )
