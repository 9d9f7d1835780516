"""FastAPI application that ingests workspace activity and serves time reports."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any, AsyncIterator, Callable, Dict, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, ConfigDict

from .accrual import AccrualEngine
from .aggregation import build_series, build_totals, format_bucket_label
from .config import TrackerSettings
from .models import ActivityKind, Granularity
from .paths import get_store_path
from .reporting import format_duration
from .store import JsonTimesStore, PersistentStore, StoreReadError
from .tracker import ActivityTracker
from .workspaces import WorkspaceRegistry

logger = logging.getLogger(__name__)

DEFAULT_RANGE_DAYS = 7


class ActivityPayload(BaseModel):
    kind: ActivityKind
    path: Optional[str] = None
    workspace: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


def create_app(
    *,
    store_path: Optional[Path] = None,
    settings: Optional[TrackerSettings] = None,
    store: Optional[PersistentStore] = None,
    clock: Callable[[], datetime] = datetime.now,
) -> FastAPI:
    """Instantiate the FastAPI application."""
    resolved_settings = settings or TrackerSettings()
    if store is None:
        store_path = Path(store_path or get_store_path())
        store = JsonTimesStore(store_path)
    registry = WorkspaceRegistry(resolved_settings.workspaces)
    engine = AccrualEngine(store, default_idle_threshold=resolved_settings.idle_threshold_seconds)
    tracker = ActivityTracker(engine, registry, resolved_settings, clock=clock)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
        if store_path is not None:
            logger.info("Storing workspace times in %s", store_path)
        tracker.start()
        yield

    app = FastAPI(title="Spacetime", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = store
    app.state.store_path = store_path
    app.state.tracker = tracker

    static_dir = Path(__file__).parent / "static"
    if static_dir.exists():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")

    @app.get("/api/status")
    def status(request: Request) -> Dict[str, Any]:
        path = request.app.state.store_path
        return {
            "store_path": str(path) if path else None,
            "idle_minutes": resolved_settings.idle_threshold_seconds / 60.0,
            "workspaces": registry.as_dict(),
        }

    @app.post("/api/activity")
    def record_activity(payload: ActivityPayload, request: Request) -> Dict[str, Any]:
        if payload.path is None and payload.workspace is None:
            raise HTTPException(status_code=400, detail="path or workspace is required")
        result = request.app.state.tracker.notify(
            payload.kind, path=payload.path, workspace=payload.workspace
        )
        if result is None:
            return {"workspace": None, "accrued_seconds": 0.0}
        workspace, accrued = result
        return {"workspace": workspace, "accrued_seconds": accrued}

    @app.get("/api/series")
    def series(
        request: Request,
        start: Optional[str] = Query(
            default=None,
            description="Start date in YYYY-MM-DD format (inclusive).",
        ),
        end: Optional[str] = Query(
            default=None,
            description="End date in YYYY-MM-DD format (inclusive).",
        ),
        granularity: Granularity = Query(default=Granularity.DAILY),
    ) -> Dict[str, Any]:
        today = clock().date()
        start_day, end_day = _resolve_range(start, end, today)
        result = build_series(_load_totals(request), start_day, end_day, granularity)
        return {
            "start": start_day.isoformat(),
            "end": end_day.isoformat(),
            "granularity": granularity.value,
            "labels": result.labels,
            "display_labels": [
                format_bucket_label(label, granularity, today) for label in result.labels
            ],
            "series": result.series,
        }

    @app.get("/api/totals")
    def totals(
        request: Request,
        start: Optional[str] = Query(
            default=None,
            description="Start date in YYYY-MM-DD format (inclusive).",
        ),
        end: Optional[str] = Query(
            default=None,
            description="End date in YYYY-MM-DD format (inclusive).",
        ),
    ) -> Dict[str, Any]:
        start_day, end_day = _resolve_range(start, end, clock().date())
        rows = build_totals(_load_totals(request), start_day, end_day)
        return {
            "start": start_day.isoformat(),
            "end": end_day.isoformat(),
            "totals": [
                {
                    "workspace": row.workspace,
                    "total_seconds": row.total_seconds,
                    "formatted": format_duration(row.total_seconds),
                }
                for row in rows
            ],
        }

    @app.get("/")
    def index(request: Request):
        index_path = (Path(__file__).parent / "static" / "index.html").resolve()
        if not index_path.exists():
            raise HTTPException(status_code=404, detail="UI not found")
        return FileResponse(index_path)

    return app


def _load_totals(request: Request) -> Dict[str, Dict[str, float]]:
    try:
        return request.app.state.store.load()
    except StoreReadError as exc:
        logger.error("%s", exc)
        raise HTTPException(status_code=503, detail="Stored totals are unreadable") from exc


def _resolve_range(
    start: Optional[str], end: Optional[str], today: date
) -> tuple[date, date]:
    end_day = _parse_date(end) if end else today
    start_day = _parse_date(start) if start else end_day - timedelta(days=DEFAULT_RANGE_DAYS)
    return start_day, end_day


def _parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Invalid date format") from exc
