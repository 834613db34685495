from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator

from fastapi import APIRouter
from sse_starlette.sse import EventSourceResponse

from spinview.api.events import service
from spinview.api.events.dto import EventsResponse

router = APIRouter(prefix="/events")


async def _stream() -> AsyncGenerator[str, None]:
    last_id = 0
    while True:
        batch = service.collect(last_id)
        if batch.events:
            last_id = batch.events[-1].id
            yield batch.model_dump_json()
        await asyncio.sleep(0.1)


@router.get("")
async def stream_events() -> EventSourceResponse:
    return EventSourceResponse(_stream())


@router.get("/recent")
def recent_events(after: int = 0) -> EventsResponse:
    return service.collect(after)
