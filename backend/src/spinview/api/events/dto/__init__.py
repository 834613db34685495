from spinview.api.events.dto.events import EventSnapshot, EventsResponse

__all__ = ["EventSnapshot", "EventsResponse"]
