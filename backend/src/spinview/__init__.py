"""SpinView: interaction core for a 360° image-sequence viewer."""

from spinview.core.controller import ViewerController, create_viewer
from spinview.core.config import ViewerConfig
from spinview.core.surface import ControlSurface

__all__ = ["ViewerController", "ViewerConfig", "ControlSurface", "create_viewer"]
