"""Bucket per-day workspace totals into chartable series and range totals."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator, Mapping, Optional, Union

from .models import AggregatedSeries, Granularity, WorkspaceTotal

DateLike = Union[date, str]

DATE_FMT = "%Y-%m-%d"

_MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def parse_date(value: DateLike) -> date:
    """Accept a ``date``/``datetime`` or a ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value.strip(), DATE_FMT).date()


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every calendar date from ``start`` to ``end`` inclusive."""
    current = start
    step = timedelta(days=1)
    while current <= end:
        yield current
        current += step


def week_start(day: date) -> date:
    """Monday on or before ``day``."""
    return day - timedelta(days=day.weekday())


def date_to_bucket_key(day: date, granularity: Granularity) -> str:
    granularity = Granularity(granularity)
    if granularity is Granularity.DAILY:
        return day.isoformat()
    if granularity is Granularity.WEEKLY:
        return week_start(day).isoformat()
    if granularity is Granularity.MONTHLY:
        return f"{day.year:04d}-{day.month:02d}"
    return f"{day.year:04d}"


def build_series(
    daily_totals: Mapping[str, Mapping[str, float]],
    start_date: DateLike,
    end_date: DateLike,
    granularity: Granularity,
) -> AggregatedSeries:
    """Sum each workspace's days into granularity buckets over the range.

    Labels follow the chronological order of the first date mapped to each
    bucket. Every workspace gets a series aligned to the labels, zero-filled
    where it has no time. A reversed range yields no buckets.
    """
    start = parse_date(start_date)
    end = parse_date(end_date)

    bucket_dates: dict[str, list[str]] = {}
    for day in iter_dates(start, end):
        key = date_to_bucket_key(day, granularity)
        bucket_dates.setdefault(key, []).append(day.isoformat())

    labels = list(bucket_dates)
    if not labels:
        return AggregatedSeries()
    series: dict[str, list[float]] = {}
    for workspace, days in daily_totals.items():
        series[workspace] = [
            float(sum(days.get(iso_day, 0.0) for iso_day in bucket_dates[label]))
            for label in labels
        ]
    return AggregatedSeries(labels=labels, series=series)


def build_totals(
    daily_totals: Mapping[str, Mapping[str, float]],
    start_date: DateLike,
    end_date: DateLike,
) -> list[WorkspaceTotal]:
    """Total each workspace over ``[start_date, end_date]``, ignoring buckets."""
    start = parse_date(start_date)
    end = parse_date(end_date)
    totals: list[WorkspaceTotal] = []
    for workspace, days in daily_totals.items():
        total = 0.0
        for iso_day, seconds in days.items():
            day = _parse_day_key(iso_day)
            if day is not None and start <= day <= end:
                total += seconds
        totals.append(WorkspaceTotal(workspace=workspace, total_seconds=total))
    return totals


def format_bucket_label(
    key: str, granularity: Granularity, today: Optional[date] = None
) -> str:
    """Human label for a bucket key, e.g. ``Week of Jan 1`` or ``Mar 2023``.

    The year is shown only when it differs from the current one.
    """
    granularity = Granularity(granularity)
    current_year = (today or date.today()).year
    if granularity is Granularity.YEARLY:
        return key
    if granularity is Granularity.MONTHLY:
        year, month = (int(part) for part in key.split("-"))
        label = _MONTH_ABBREVIATIONS[month - 1]
        return label if year == current_year else f"{label} {year}"

    day = parse_date(key)
    label = f"{_MONTH_ABBREVIATIONS[day.month - 1]} {day.day}"
    if day.year != current_year:
        label = f"{label}, {day.year}"
    if granularity is Granularity.WEEKLY:
        label = f"Week of {label}"
    return label


def _parse_day_key(value: str) -> Optional[date]:
    # Only canonical YYYY-MM-DD keys count, matching what build_series looks up.
    try:
        day = datetime.strptime(value, DATE_FMT).date()
    except (TypeError, ValueError):
        return None
    return day if day.isoformat() == value else None

