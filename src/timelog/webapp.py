"""FastAPI application that exposes the timelog reports as a local JSON API."""

from __future__ import annotations

import logging
import threading
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict

from . import __version__
from .activity import Activities
from .config import TimelogSettings
from .models import TIME_FMT, Entry
from .store import CorruptLogError, Timelog, describe_day, describe_week

logger = logging.getLogger(__name__)


class EntryPayload(BaseModel):
    task: str

    model_config = ConfigDict(extra="forbid")


class TimelogHolder:
    """Load the timelog per request and serialize writers."""

    def __init__(self, settings: TimelogSettings, clock: Callable[[], datetime]) -> None:
        self.settings = settings
        self.clock = clock
        self.lock = threading.Lock()

    def load(self) -> Timelog:
        try:
            return Timelog.from_settings(self.settings, clock=self.clock)
        except CorruptLogError as exc:
            logger.error("Corrupt timelog %s: %s", self.settings.path, exc)
            raise HTTPException(status_code=500, detail=str(exc)) from exc


def create_app(
    *,
    settings: Optional[TimelogSettings] = None,
    clock: Callable[[], datetime] = datetime.now,
) -> FastAPI:
    """Instantiate the FastAPI application."""
    resolved_settings = settings or TimelogSettings.from_env()
    holder = TimelogHolder(resolved_settings, clock)

    app = FastAPI(title="Timelog", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.timelog = holder

    @app.get("/api/status")
    def status(request: Request) -> Dict[str, Any]:
        timelog = request.app.state.timelog.load()
        return {
            "timelog_path": str(resolved_settings.path),
            "entry_count": len(timelog),
        }

    @app.get("/api/day")
    def day_report(
        request: Request,
        date: Optional[str] = Query(
            default=None,
            description="Target date in YYYY-MM-DD format. Defaults to today.",
        ),
    ) -> Dict[str, Any]:
        timelog = request.app.state.timelog.load()
        target_day = _parse_date(date, timelog)
        return _report_payload(
            describe_day(target_day), target_day, timelog.get_day(target_day)
        )

    @app.get("/api/week")
    def week_report(
        request: Request,
        date: Optional[str] = Query(
            default=None,
            description="Any date of the ISO week in YYYY-MM-DD format.",
        ),
    ) -> Dict[str, Any]:
        timelog = request.app.state.timelog.load()
        target_day = _parse_date(date, timelog)
        return _report_payload(
            describe_week(target_day), target_day, timelog.get_week(target_day)
        )

    @app.post("/api/entries")
    def add_entry(payload: EntryPayload, request: Request) -> Dict[str, Any]:
        task = payload.task.strip()
        if not task:
            raise HTTPException(status_code=400, detail="task is required")
        holder = request.app.state.timelog
        with holder.lock:
            timelog = holder.load()
            try:
                entry = timelog.add(task)
            except CorruptLogError as exc:
                raise HTTPException(status_code=409, detail=str(exc)) from exc
            except ValueError as exc:
                raise HTTPException(status_code=400, detail=str(exc)) from exc
            try:
                timelog.save()
            except OSError as exc:
                logger.error("Failed to save timelog %s: %s", timelog.path, exc)
                raise HTTPException(
                    status_code=503, detail=f"Failed to save timelog: {exc}"
                ) from exc
        logger.info("Added entry %s", entry)
        return _entry_payload(entry)

    return app


def _parse_date(value: Optional[str], timelog: Timelog) -> date:
    if not value:
        return timelog.today()
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Invalid date format") from exc


def _entry_payload(entry: Entry) -> Dict[str, Any]:
    return {
        "stop": entry.stop.strftime(TIME_FMT),
        "task": entry.task,
        "is_slack": entry.is_slack,
    }


def _report_payload(heading: str, target_day: date, entries: List[Entry]) -> Dict[str, Any]:
    payload = Activities.from_entries(entries).as_dict()
    payload.update(
        {
            "date": target_day.strftime("%Y-%m-%d"),
            "heading": heading,
            "entries": [_entry_payload(entry) for entry in entries],
            "history": Timelog.get_history(entries),
        }
    )
    return payload
