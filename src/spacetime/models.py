"""Domain models for tracked workspace time."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict


DailyTotals = Dict[str, Dict[str, float]]
"""Workspace name -> ISO date (``YYYY-MM-DD``) -> accumulated seconds."""


class ActivityKind(str, Enum):
    OPENED = "opened"
    SAVED = "saved"
    CLOSED = "closed"


class Granularity(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(slots=True)
class ActivityEvent:
    """A single host notification for one workspace."""

    timestamp: datetime
    kind: ActivityKind


@dataclass(slots=True)
class AggregatedSeries:
    """Bucket labels plus one aligned sequence of seconds per workspace."""

    labels: list[str] = field(default_factory=list)
    series: dict[str, list[float]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "labels": list(self.labels),
            "series": {name: list(values) for name, values in self.series.items()},
        }


@dataclass(slots=True)
class WorkspaceTotal:
    workspace: str
    total_seconds: float
