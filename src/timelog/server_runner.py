"""Launch the local JSON dashboard."""

from __future__ import annotations

import logging
import threading
import webbrowser
from typing import Optional

import uvicorn

from .config import TimelogSettings
from .store import Timelog
from .webapp import create_app

logger = logging.getLogger(__name__)

BROWSER_DELAY_SECONDS = 1.0


def run_dashboard(
    *,
    host: str = "127.0.0.1",
    port: int = 8765,
    settings: Optional[TimelogSettings] = None,
    open_browser: bool = True,
    log_level: str = "info",
) -> None:
    """Serve the reports for ``settings.path`` until interrupted.

    The log is parsed once up front so that a corrupt file stops the
    dashboard before it binds the port.
    """
    settings = settings or TimelogSettings.from_env()
    entry_count = len(Timelog.from_settings(settings))
    logger.info("Serving %s (%d entries) on %s:%d", settings.path, entry_count, host, port)

    if open_browser:
        timer = threading.Timer(
            BROWSER_DELAY_SECONDS, _open_report, args=(f"http://{host}:{port}/api/day",)
        )
        timer.daemon = True
        timer.start()

    logging.getLogger("uvicorn.error").setLevel(log_level.upper())
    uvicorn.run(create_app(settings=settings), host=host, port=port, log_level=log_level)


def _open_report(url: str) -> None:
    try:
        webbrowser.open(url)
    except webbrowser.Error:
        logger.exception("Failed to launch browser for %s", url)
