"""Bridge host notifications (file saves, folder opens) to the accrual engine."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from .accrual import AccrualEngine
from .config import TrackerSettings
from .models import ActivityEvent, ActivityKind
from .workspaces import WorkspaceRegistry

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class ActivityTracker:
    """Timestamps host notifications and routes them to their workspace."""

    def __init__(
        self,
        engine: AccrualEngine,
        registry: WorkspaceRegistry,
        settings: TrackerSettings,
        clock: Clock = datetime.now,
    ) -> None:
        self.engine = engine
        self.registry = registry
        self.settings = settings
        self._clock = clock

    def start(self) -> None:
        names = list(self.registry)
        self.engine.seed_opened(names, self._clock())
        logger.info("Tracking %d workspace(s): %s", len(names), ", ".join(names) or "-")

    def notify(
        self,
        kind: ActivityKind,
        *,
        path: Optional[str] = None,
        workspace: Optional[str] = None,
    ) -> Optional[tuple[str, float]]:
        """Record one notification.

        Returns ``(workspace, accrued_seconds)``, or ``None`` when the
        notification does not belong to a registered workspace.
        """
        kind = ActivityKind(kind)
        name = self._resolve(path=path, workspace=workspace)
        if name is None:
            logger.debug("Dropping %s event for %s", kind.value, path or workspace)
            return None
        event = ActivityEvent(timestamp=self._clock(), kind=kind)
        accrued = self.engine.record_activity(
            name, event, self.settings.idle_threshold_seconds
        )
        return name, accrued

    def _resolve(self, *, path: Optional[str], workspace: Optional[str]) -> Optional[str]:
        if workspace is not None:
            return workspace if workspace in self.registry else None
        if path is not None:
            return self.registry.resolve(path)
        return None
