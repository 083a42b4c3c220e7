"""Derived Aggregates - summary counts and duration spans from list snapshots.

Invariants:
    - Pure: inputs are the current list snapshots, "today" is passed in
    - Nothing here is persisted; callers recompute on every render
    - distinct_technologies is a case-sensitive set union over both kinds
    - Durations are whole months and never negative (clamped to 0)

Design Decisions:
    - Accepts mappings or objects (ORM rows, response models) via _read, so the
      API and the client share one implementation
"""

from collections.abc import Iterable
from datetime import date
from typing import Any

_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)


def _read(item: Any, name: str, default: Any = None) -> Any:
    if isinstance(item, dict):
        return item.get(name, default)
    return getattr(item, name, default)


# --- Summary counts -----------------------------------------------------------------

def distinct_technology_count(*collections: Iterable[Any]) -> int:
    """Size of the union of all technologies across the given collections."""
    seen: set[str] = set()
    for collection in collections:
        for item in collection:
            seen.update(_read(item, "technologies") or [])
    return len(seen)


def compute_dashboard_stats(
    portfolios: Iterable[Any], experiences: Iterable[Any],
) -> dict:
    """Compute dashboard summary counts. Pure, no IO."""
    portfolios = list(portfolios)
    experiences = list(experiences)
    total_projects = len(portfolios)
    featured = sum(1 for p in portfolios if _read(p, "featured", False))

    return {
        "total_projects": total_projects,
        "featured_projects": featured,
        "featured_percentage": (
            round(featured / total_projects * 100) if total_projects else 0
        ),
        "total_experiences": len(experiences),
        "current_jobs": sum(1 for e in experiences if _read(e, "current", False)),
        "distinct_technologies": distinct_technology_count(portfolios, experiences),
    }


def empty_dashboard_stats() -> dict:
    """Zeroed stats for the best-effort fallback path."""
    return compute_dashboard_stats([], [])


# --- Durations ------------------------------------------------------------------------

def months_between(start: date, end: date) -> int:
    """(endYear - startYear) * 12 + (endMonth - startMonth); may be negative."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def compute_duration_months(
    start: date, end: date | None, current: bool, today: date,
) -> int:
    """Whole months from start to end; end falls back to today."""
    effective_end = today if current or end is None else end
    return max(months_between(start, effective_end), 0)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_duration(months: int) -> str:
    """30 -> '2 years 6 months', 12 -> '1 year', 1 -> '1 month', 0 -> '0 months'."""
    years, rest = divmod(max(months, 0), 12)
    if years and rest:
        return f"{_plural(years, 'year')} {_plural(rest, 'month')}"
    if years:
        return _plural(years, "year")
    return _plural(rest, "month")


def format_month_year(value: date) -> str:
    return f"{_MONTH_NAMES[value.month - 1]} {value.year}"


def format_period(start: date, end: date | None, current: bool) -> str:
    """'January 2020 - Present' or 'January 2020 - July 2022'."""
    if current or end is None:
        return f"{format_month_year(start)} - Present"
    return f"{format_month_year(start)} - {format_month_year(end)}"


def describe_experience(item: Any, today: date) -> dict:
    """Derived display fields for one experience entry."""
    start = _read(item, "start_date")
    end = _read(item, "end_date")
    current = bool(_read(item, "current", False))
    months = compute_duration_months(start, end, current, today)
    return {
        "duration_months": months,
        "duration_label": format_duration(months),
        "period": format_period(start, None if current else end, current),
    }
