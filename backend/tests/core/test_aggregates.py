"""Tests for derived aggregates - dashboard counts and duration formatting."""

from datetime import date

from folio.core.aggregates import (
    compute_dashboard_stats, compute_duration_months, describe_experience,
    distinct_technology_count, empty_dashboard_stats, format_duration, format_period,
)


def test_empty_collections_return_zero_stats():
    stats = compute_dashboard_stats([], [])
    assert stats == {
        "total_projects": 0,
        "featured_projects": 0,
        "featured_percentage": 0,
        "total_experiences": 0,
        "current_jobs": 0,
        "distinct_technologies": 0,
    }
    assert empty_dashboard_stats() == stats


def test_counts_featured_and_current():
    portfolios = [
        {"featured": True, "technologies": ["React"]},
        {"featured": False, "technologies": ["Go"]},
        {"featured": True, "technologies": []},
    ]
    experiences = [
        {"current": True, "technologies": []},
        {"current": False, "technologies": []},
    ]
    stats = compute_dashboard_stats(portfolios, experiences)
    assert stats["total_projects"] == 3
    assert stats["featured_projects"] == 2
    assert stats["featured_percentage"] == 67
    assert stats["total_experiences"] == 2
    assert stats["current_jobs"] == 1


def test_distinct_technologies_is_union_across_kinds():
    portfolios = [{"technologies": ["React", "TypeScript"]}]
    experiences = [{"technologies": ["React", "Go"]}]
    assert distinct_technology_count(portfolios, experiences) == 3


def test_distinct_technologies_case_sensitive():
    assert distinct_technology_count([{"technologies": ["react", "React"]}]) == 2


def test_accepts_objects_as_well_as_dicts():
    class Row:
        featured = True
        technologies = ["Python"]

    stats = compute_dashboard_stats([Row()], [])
    assert stats["featured_projects"] == 1
    assert stats["distinct_technologies"] == 1


def test_duration_uses_end_date():
    assert compute_duration_months(
        date(2020, 1, 1), date(2022, 7, 1), False, today=date(2030, 1, 1),
    ) == 30


def test_current_duration_runs_to_today():
    assert compute_duration_months(
        date(2020, 1, 15), date(2020, 2, 1), True, today=date(2021, 1, 1),
    ) == 12


def test_negative_span_clamps_to_zero():
    assert compute_duration_months(
        date(2022, 5, 1), date(2021, 1, 1), False, today=date(2030, 1, 1),
    ) == 0


def test_format_duration_variants():
    assert format_duration(30) == "2 years 6 months"
    assert format_duration(12) == "1 year"
    assert format_duration(13) == "1 year 1 month"
    assert format_duration(1) == "1 month"
    assert format_duration(0) == "0 months"


def test_format_period():
    assert format_period(date(2020, 1, 1), None, True) == "January 2020 - Present"
    assert format_period(date(2020, 1, 1), date(2022, 7, 1), False) == (
        "January 2020 - July 2022"
    )


def test_describe_experience_ignores_end_date_when_current():
    item = {
        "start_date": date(2020, 1, 1),
        "end_date": date(2020, 3, 1),
        "current": True,
    }
    described = describe_experience(item, today=date(2022, 7, 1))
    assert described == {
        "duration_months": 30,
        "duration_label": "2 years 6 months",
        "period": "January 2020 - Present",
    }
