"""Helpers to launch the local web dashboard."""

from __future__ import annotations

import logging
import threading
import time
import webbrowser
from pathlib import Path
from typing import Optional

import uvicorn

from .config import TrackerSettings
from .paths import get_store_path
from .webapp import create_app

logger = logging.getLogger(__name__)


def run_dashboard(
    *,
    host: str = "127.0.0.1",
    port: int = 8765,
    store_path: Optional[Path] = None,
    settings: Optional[TrackerSettings] = None,
    open_browser: bool = True,
    log_level: str = "info",
) -> None:
    """Start the FastAPI dashboard and optional browser tab."""
    resolved_store = Path(store_path or get_store_path())
    resolved_settings = settings or TrackerSettings()
    app = create_app(store_path=resolved_store, settings=resolved_settings)
    logger.info(
        "Dashboard on http://%s:%d; idle cap %.0f min; totals in %s",
        host,
        port,
        resolved_settings.idle_threshold_seconds / 60,
        resolved_store,
    )
    if not resolved_settings.workspaces:
        logger.warning("No workspaces registered; activity events will be dropped.")
    for name, folder in resolved_settings.workspaces.items():
        logger.info("Workspace %s -> %s", name, folder)

    if open_browser:
        url = f"http://{host}:{port}"
        threading.Thread(
            target=_launch_browser_after_delay, args=(url,), daemon=True
        ).start()

    logging.getLogger("uvicorn.error").setLevel(log_level.upper())
    uvicorn.run(app, host=host, port=port, log_level=log_level)


def _launch_browser_after_delay(url: str) -> None:
    time.sleep(1.0)
    try:
        webbrowser.open(url)
    except Exception:
        logger.exception("Failed to launch browser for %s", url)
