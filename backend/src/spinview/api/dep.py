from __future__ import annotations

from fastapi import HTTPException, Request

from spinview.core.controller import ViewerController


def get_viewer(request: Request) -> ViewerController:
    viewer = getattr(request.app.state, "viewer", None)
    if viewer is None:
        raise HTTPException(status_code=503, detail="Viewer is not configured")
    return viewer
