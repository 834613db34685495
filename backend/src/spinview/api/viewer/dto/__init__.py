from spinview.api.viewer.dto.viewer import MoveResponse, PointerRequest, ToggleRequest

__all__ = ["MoveResponse", "PointerRequest", "ToggleRequest"]
