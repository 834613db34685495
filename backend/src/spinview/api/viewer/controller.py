from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from spinview.api.dep import get_viewer
from spinview.api.viewer import service
from spinview.api.viewer.dto import MoveResponse, PointerRequest, ToggleRequest
from spinview.core.controller import ViewerController, ViewerSnapshot
from spinview.core.pins import Pin

router = APIRouter(prefix="/viewer")


@router.get("")
def get_state(viewer: ViewerController = Depends(get_viewer)) -> ViewerSnapshot:
    return viewer.snapshot()


@router.post("/next")
def next_frame(viewer: ViewerController = Depends(get_viewer)) -> MoveResponse:
    return MoveResponse(index=service.move(viewer, "next"))


@router.post("/prev")
def prev_frame(viewer: ViewerController = Depends(get_viewer)) -> MoveResponse:
    return MoveResponse(index=service.move(viewer, "prev"))


@router.post("/autoplay", status_code=204)
def toggle_autoplay(req: ToggleRequest, viewer: ViewerController = Depends(get_viewer)) -> None:
    viewer.surface.toggle_autoplay(req.state)


@router.post("/recording", status_code=204)
def toggle_recording(req: ToggleRequest, viewer: ViewerController = Depends(get_viewer)) -> None:
    viewer.surface.toggle_recording(req.state)


@router.get("/pins")
def list_pins(viewer: ViewerController = Depends(get_viewer)) -> list[Pin]:
    return viewer.pins.pins


@router.post("/click")
def click(req: PointerRequest, viewer: ViewerController = Depends(get_viewer)) -> Pin | None:
    try:
        return service.click(viewer, req)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/pins/{pin_id}/click", status_code=204)
def click_pin(pin_id: str, viewer: ViewerController = Depends(get_viewer)) -> None:
    pin = service.find_pin(viewer, pin_id)
    if pin is None:
        raise HTTPException(status_code=404, detail=f"Pin not found: {pin_id}")
    viewer.pin_click(pin)


@router.delete("/pins/{pin_id}", status_code=204)
def remove_pin(pin_id: str, viewer: ViewerController = Depends(get_viewer)) -> None:
    pin = service.find_pin(viewer, pin_id)
    if pin is None:
        raise HTTPException(status_code=404, detail=f"Pin not found: {pin_id}")
    viewer.pin_double_click(pin)
