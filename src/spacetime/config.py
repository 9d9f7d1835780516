"""Configuration models and helpers for workspace time tracking."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Mapping, Optional


DEFAULT_IDLE_THRESHOLD_SECONDS = 15 * 60


def resolve_idle_threshold(value: object) -> float:
    """Return ``value`` in seconds, or the default when it is unusable.

    Anything that is not a positive, finite number (``None``, zero, negatives,
    strings, NaN) falls back to the default rather than being rejected.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return float(DEFAULT_IDLE_THRESHOLD_SECONDS)
    if not math.isfinite(value) or value <= 0:
        return float(DEFAULT_IDLE_THRESHOLD_SECONDS)
    return float(value)


@dataclass(slots=True)
class TrackerSettings:
    """Runtime configuration for the activity tracker."""

    idle_threshold: timedelta = timedelta(seconds=DEFAULT_IDLE_THRESHOLD_SECONDS)
    workspaces: dict[str, Path] = field(default_factory=dict)

    @property
    def idle_threshold_seconds(self) -> float:
        return resolve_idle_threshold(self.idle_threshold.total_seconds())

    @classmethod
    def from_options(
        cls,
        idle_minutes: Optional[float] = None,
        workspaces: Optional[Mapping[str, Path]] = None,
    ) -> "TrackerSettings":
        seconds = resolve_idle_threshold(
            idle_minutes * 60 if isinstance(idle_minutes, (int, float)) else None
        )
        return cls(
            idle_threshold=timedelta(seconds=seconds),
            workspaces={name: Path(folder) for name, folder in (workspaces or {}).items()},
        )


def parse_workspace_option(value: str) -> tuple[str, Path]:
    """Parse a ``NAME=PATH`` option; a bare path uses its folder name."""
    name, sep, folder = value.partition("=")
    if not sep:
        path = Path(value).expanduser()
        name = path.resolve().name
        if not name:
            raise ValueError(f"Cannot derive a workspace name from {value!r}")
        return name, path
    name = name.strip()
    folder = folder.strip()
    if not name or not folder:
        raise ValueError(f"Expected NAME=PATH, got {value!r}")
    return name, Path(folder).expanduser()
