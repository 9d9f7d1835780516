"""Durable storage for per-day workspace totals."""

from __future__ import annotations

import copy
import json
import logging
import math
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

from .models import DailyTotals

logger = logging.getLogger(__name__)


class StoreReadError(Exception):
    """The totals file exists but could not be read."""


class PersistentStore(Protocol):
    """Whole-mapping read/write of :data:`DailyTotals`."""

    def load(self) -> DailyTotals: ...

    def save(self, totals: DailyTotals) -> None: ...


def sanitize_totals(raw: Any) -> DailyTotals:
    """Keep only well-formed ``{workspace: {date: seconds}}`` entries."""
    if not isinstance(raw, dict):
        return {}
    totals: DailyTotals = {}
    for workspace, days in raw.items():
        if not isinstance(workspace, str) or not isinstance(days, dict):
            continue
        clean: dict[str, float] = {}
        for day, seconds in days.items():
            if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
                continue
            if not math.isfinite(seconds):
                continue
            clean[str(day)] = float(seconds)
        totals[workspace] = clean
    return totals


class JsonTimesStore:
    """Stores the totals mapping as a single JSON document on disk."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> DailyTotals:
        """Missing, empty or corrupt content loads as empty totals.

        Raises :class:`StoreReadError` when the file exists but cannot be read,
        so callers never mistake an unreadable history for an empty one.
        """
        try:
            data = self.path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StoreReadError(f"Could not read {self.path}: {exc}") from exc
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning("Ignoring totals file %s that is not UTF-8.", self.path)
            return {}
        if not text.strip():
            return {}
        try:
            raw = json.loads(text)
        except ValueError:
            logger.warning("Ignoring corrupt totals file %s.", self.path)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring totals file %s with unexpected layout.", self.path)
            return {}
        return sanitize_totals(raw)

    def save(self, totals: DailyTotals) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(totals, handle, indent=2, sort_keys=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class MemoryTimesStore:
    """In-process store; hands out copies so callers never share state."""

    def __init__(self, initial: DailyTotals | None = None) -> None:
        self._totals: DailyTotals = sanitize_totals(initial or {})

    def load(self) -> DailyTotals:
        return copy.deepcopy(self._totals)

    def save(self, totals: DailyTotals) -> None:
        self._totals = copy.deepcopy(totals)
