"""Convert workspace activity events into idle-capped, persisted time."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Iterable, Optional

from .config import DEFAULT_IDLE_THRESHOLD_SECONDS, resolve_idle_threshold
from .models import ActivityEvent, ActivityKind
from .store import PersistentStore, StoreReadError

logger = logging.getLogger(__name__)


class AccrualEngine:
    """Owns the session event log and credits time to the store.

    Every event is appended to the workspace's log. Only ``saved`` events
    accrue: the gap since the previous event of any kind, capped at the idle
    threshold and floored at zero, is added to the save's calendar day.
    The log lives for the lifetime of the process and is never persisted.
    """

    def __init__(
        self,
        store: PersistentStore,
        *,
        default_idle_threshold: float = DEFAULT_IDLE_THRESHOLD_SECONDS,
    ) -> None:
        self.store = store
        self.default_idle_threshold = resolve_idle_threshold(default_idle_threshold)
        self._events: dict[str, list[ActivityEvent]] = {}
        self._lock = threading.Lock()

    def seed_opened(self, workspaces: Iterable[str], timestamp: datetime) -> None:
        """Record an ``opened`` baseline for each workspace open at startup."""
        for workspace in workspaces:
            self.record_activity(
                workspace, ActivityEvent(timestamp=timestamp, kind=ActivityKind.OPENED)
            )

    def record_activity(
        self,
        workspace: str,
        event: ActivityEvent,
        idle_threshold_seconds: Optional[float] = None,
    ) -> float:
        """Log ``event`` and return the seconds accrued for it (usually 0)."""
        if idle_threshold_seconds is None:
            threshold = self.default_idle_threshold
        else:
            threshold = resolve_idle_threshold(idle_threshold_seconds)

        with self._lock:
            log = self._events.setdefault(workspace, [])
            prior = log[-1] if log else None
            log.append(event)

            if event.kind != ActivityKind.SAVED or prior is None:
                return 0.0

            elapsed = (event.timestamp - prior.timestamp).total_seconds()
            delta = max(0.0, min(threshold, elapsed))
            day = event.timestamp.date().isoformat()

            try:
                totals = self.store.load()
            except StoreReadError:
                logger.exception(
                    "Skipping %.1fs for %s; stored totals are unreadable.", delta, workspace
                )
                return 0.0
            days = totals.setdefault(workspace, {})
            days[day] = days.get(day, 0.0) + delta
            self.store.save(totals)

        logger.debug(
            "Accrued %.1fs to %s on %s (gap %.1fs, cap %.0fs).",
            delta,
            workspace,
            day,
            elapsed,
            threshold,
        )
        return delta

    def events_for(self, workspace: str) -> list[ActivityEvent]:
        with self._lock:
            return list(self._events.get(workspace, ()))

    def workspaces(self) -> list[str]:
        with self._lock:
            return list(self._events)
