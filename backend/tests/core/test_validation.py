"""Tests for the Validation Layer - pure rules, no IO."""

from datetime import date

from folio.core.domain_types import ExperienceRecord, PortfolioRecord
from folio.core.validation import (
    check_experience_record, check_portfolio_record, normalize_technologies,
    split_technologies, validate_experience, validate_portfolio,
)


def _portfolio(**overrides):
    raw = {
        "title": "Folio",
        "description": "Personal site",
        "image_url": "",
        "project_url": None,
        "github_url": "https://github.com/example/folio",
        "technologies": "React, TypeScript",
        "featured": False,
    }
    raw.update(overrides)
    return raw


def _experience(**overrides):
    raw = {
        "title": "Engineer",
        "company": "Acme",
        "location": "Remote",
        "start_date": "2020-01-01",
        "end_date": "2022-07-01",
        "current": False,
        "description": "Billing",
        "technologies": ["Python"],
    }
    raw.update(overrides)
    return raw


# --- Technologies ---

def test_split_technologies_trims_and_drops_empty_parts():
    assert split_technologies("React, TypeScript,  Node.js ") == [
        "React", "TypeScript", "Node.js",
    ]


def test_split_technologies_only_separators_is_empty():
    assert split_technologies(" , ,") == []


def test_normalize_technologies_accepts_list():
    assert normalize_technologies([" Go ", "", "Rust"]) == ["Go", "Rust"]


def test_normalize_technologies_none_is_empty():
    assert normalize_technologies(None) == []


# --- Portfolio ---

def test_valid_portfolio_builds_record():
    result = validate_portfolio(_portfolio(title="  Folio  "))
    assert result.ok
    assert result.record.title == "Folio"
    assert result.record.technologies == ["React", "TypeScript"]


def test_empty_urls_become_none():
    result = validate_portfolio(_portfolio())
    assert result.record.image_url is None
    assert result.record.project_url is None
    assert result.record.github_url == "https://github.com/example/folio"


def test_whitespace_title_is_required_error():
    result = validate_portfolio(_portfolio(title="   "))
    assert not result.ok
    assert result.record is None
    assert result.errors["title"] == ["Title is required"]


def test_relative_url_rejected():
    result = validate_portfolio(_portfolio(project_url="not a url"))
    assert result.errors["project_url"] == ["Must be a valid URL"]


def test_technologies_of_only_separators_rejected():
    result = validate_portfolio(_portfolio(technologies=" , ,"))
    assert result.errors["technologies"] == ["At least one technology is required"]


def test_errors_reported_for_every_failing_field():
    result = validate_portfolio(_portfolio(title="", description="", technologies=""))
    assert set(result.errors) == {"title", "description", "technologies"}


def test_featured_string_flag_parsed():
    assert validate_portfolio(_portfolio(featured="true")).record.featured is True
    assert validate_portfolio(_portfolio(featured="off")).record.featured is False


def test_check_portfolio_record_flags_blank_title():
    record = PortfolioRecord(title="", description="x", technologies=["Go"])
    assert "title" in check_portfolio_record(record).errors


# --- Experience ---

def test_valid_experience_parses_dates():
    result = validate_experience(_experience())
    assert result.ok
    assert result.record.start_date == date(2020, 1, 1)
    assert result.record.end_date == date(2022, 7, 1)


def test_current_clears_end_date():
    result = validate_experience(_experience(current=True))
    assert result.record.current is True
    assert result.record.end_date is None


def test_missing_start_date_is_required():
    result = validate_experience(_experience(start_date=""))
    assert result.errors["start_date"] == ["Start date is required"]


def test_malformed_start_date_is_invalid():
    result = validate_experience(_experience(start_date="01/02/2020"))
    assert result.errors["start_date"] == ["Start date must be a valid date"]


def test_end_date_before_start_rejected():
    result = validate_experience(_experience(end_date="2019-06-01"))
    assert result.errors["end_date"] == ["End date cannot be before start date"]


def test_empty_end_date_allowed_when_not_current():
    result = validate_experience(_experience(end_date=""))
    assert result.ok
    assert result.record.end_date is None


def test_accepts_date_objects():
    result = validate_experience(_experience(start_date=date(2021, 3, 1), end_date=None))
    assert result.record.start_date == date(2021, 3, 1)


def test_experience_requires_company_and_location():
    result = validate_experience(_experience(company=" ", location=""))
    assert result.errors["company"] == ["Company is required"]
    assert result.errors["location"] == ["Location is required"]


def test_check_experience_record_normalizes_current_entry():
    record = ExperienceRecord(
        title=" Engineer ", company="Acme", location="Remote",
        start_date=date(2020, 1, 1), description="Billing", technologies=["Go"],
        end_date=date(2021, 1, 1), current=True,
    )
    result = check_experience_record(record)
    assert result.ok
    assert result.record.title == "Engineer"
    assert result.record.end_date is None


def test_trailing_garbage_after_date_rejected():
    result = validate_experience(_experience(
        start_date="2020-01-01garbage", end_date="2022-07-019",
    ))
    assert not result.ok
    assert result.errors["start_date"] == ["Start date must be a valid date"]
    assert result.errors["end_date"] == ["End date must be a valid date"]


def test_iso_datetime_string_accepted():
    result = validate_experience(_experience(start_date="2020-01-01T00:00:00"))
    assert result.record.start_date == date(2020, 1, 1)


def test_datetime_string_with_garbage_rejected():
    result = validate_experience(_experience(start_date="2020-01-01Tnoon"))
    assert result.errors["start_date"] == ["Start date must be a valid date"]
