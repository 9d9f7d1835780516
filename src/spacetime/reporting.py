"""Simple reporting utilities for CLI output."""

from __future__ import annotations

from datetime import date
from typing import Optional

from .aggregation import build_series, build_totals, format_bucket_label
from .models import Granularity
from .store import PersistentStore


class ReportPrinter:
    """Render human-readable range reports in the console."""

    def __init__(self, store: PersistentStore) -> None:
        self.store = store

    def print_report(
        self,
        start: date,
        end: date,
        granularity: Granularity,
        today: Optional[date] = None,
    ) -> None:
        totals = self.store.load()
        if not totals:
            print("No workspace time recorded yet.")
            return

        print(f"Workspace time from {start.isoformat()} to {end.isoformat()}")
        print("-" * 40)
        for entry in build_totals(totals, start, end):
            print(f"  {entry.workspace:<30} {format_duration(entry.total_seconds)}")

        series = build_series(totals, start, end, granularity)
        if not series.labels:
            return
        print()
        print(f"{granularity.value.capitalize()} breakdown:")
        for index, label in enumerate(series.labels):
            display = format_bucket_label(label, granularity, today)
            bucket_total = sum(values[index] for values in series.series.values())
            print(f"  {display:<20} {format_duration(bucket_total)}")
            for workspace, values in series.series.items():
                if values[index]:
                    print(f"    {workspace:<26} {format_duration(values[index])}")


def format_duration(seconds: float) -> str:
    total_seconds = int(round(seconds))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
