from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from spinview.api.events.controller import router as events_router
from spinview.api.viewer.controller import router as viewer_router
from spinview.core.config import ViewerConfig
from spinview.core.controller import create_viewer

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config") / "viewer_config.json"


def setup_logging() -> None:
    """Configure logging for the host with INFO level and timestamp format."""
    logging.basicConfig(
        level=os.getenv("SPINVIEW_LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def load_viewer_options(path: str | Path | None = None) -> dict[str, Any] | None:
    """Viewer options from the host config file; None when the file is unreadable."""
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        logger.info(f"No config file at {config_path}, using defaults")
        return {}
    try:
        options = ViewerConfig.read_options(config_path)
    except (OSError, ValueError) as e:
        logger.error(f"Could not read viewer config {config_path}: {e}")
        return None
    logger.info(f"Loaded viewer config from {config_path}")
    return options


@asynccontextmanager
async def lifespan(app: FastAPI):
    options = load_viewer_options(os.getenv("SPINVIEW_CONFIG"))
    app.state.viewer = create_viewer(options) if options is not None else None
    try:
        yield
    finally:
        if app.state.viewer is not None:
            app.state.viewer.close()


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(viewer_router)
app.include_router(events_router)


def main() -> None:
    load_dotenv(override=True)
    setup_logging()

    import uvicorn
    logger.info("API server starting on http://localhost:8000")
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="warning")


if __name__ == "__main__":
    main()
