"""Validation Layer - pure schema rules that turn raw input into typed records.

Invariants:
    - validate_* never raise for expected violations: they return a
      ValidationResult holding either a record or field-keyed messages
    - Required strings fail when empty after trimming
    - URL fields accept "" / None as absent, otherwise require an absolute URL
    - technologies are split on ",", trimmed and filtered; empty result fails
    - Experience with current=True always ends up with end_date=None
    - check_*_record re-run the rules on an already built record (store side)
      and return its normalized form

Design Decisions:
    - Same entry point for form input (technologies as one string) and API
      input (technologies as a list): normalize_technologies accepts both
    - URL syntax checked with pydantic AnyUrl rather than a hand-written regex
    - end_date before start_date is rejected here, so durations are never negative
      for data written through this layer
"""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Any, Generic, TypeVar

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from folio.core.domain_types import (
    PORTFOLIO_URL_FIELDS, ExperienceRecord, PortfolioRecord,
)

RecordT = TypeVar("RecordT")

_url_adapter = TypeAdapter(AnyUrl)

TECHNOLOGIES_REQUIRED = "At least one technology is required"
INVALID_URL = "Must be a valid URL"

_PORTFOLIO_REQUIRED = {
    "title": "Title is required",
    "description": "Description is required",
}
_EXPERIENCE_REQUIRED = {
    "title": "Title is required",
    "company": "Company is required",
    "location": "Location is required",
    "description": "Description is required",
}


@dataclass
class ValidationResult(Generic[RecordT]):
    """Either a normalized record or field-keyed error messages."""
    record: RecordT | None = None
    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors and self.record is not None


# --- Technologies ---------------------------------------------------------------

def split_technologies(text: str) -> list[str]:
    """'React, TypeScript,  Node.js ' -> ['React', 'TypeScript', 'Node.js']."""
    return [part.strip() for part in text.split(",") if part.strip()]


def normalize_technologies(value: Any) -> list[str]:
    """Accept a comma-separated string or a sequence of strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return split_technologies(value)
    return [str(item).strip() for item in value if str(item).strip()]


# --- Field helpers -----------------------------------------------------------------

def _clean_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _is_absolute_url(value: str) -> bool:
    try:
        _url_adapter.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def _clean_url(value: Any, name: str, errors: dict[str, list[str]]) -> str | None:
    text = _clean_text(value)
    if not text:
        return None
    if not _is_absolute_url(text):
        errors.setdefault(name, []).append(INVALID_URL)
    return text


def _parse_date(value: Any) -> date | None:
    """Parse a date, an ISO 'YYYY-MM-DD' string or an ISO datetime string.

    The whole string must parse; None when it does not.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = _clean_text(value)
    if not text:
        return None
    try:
        if "T" in text:
            return datetime.fromisoformat(text).date()
        return date.fromisoformat(text)
    except ValueError:
        return None


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "on", "yes")
    return bool(value)


def _require(
    raw: Mapping[str, Any], rules: dict[str, str], errors: dict[str, list[str]],
) -> dict[str, str]:
    cleaned = {}
    for name, message in rules.items():
        cleaned[name] = _clean_text(raw.get(name))
        if not cleaned[name]:
            errors.setdefault(name, []).append(message)
    return cleaned


# --- Portfolio -----------------------------------------------------------------------

def validate_portfolio(raw: Mapping[str, Any]) -> ValidationResult[PortfolioRecord]:
    """Validate raw Portfolio input (form or API) into a PortfolioRecord."""
    errors: dict[str, list[str]] = {}
    text = _require(raw, _PORTFOLIO_REQUIRED, errors)
    urls = {name: _clean_url(raw.get(name), name, errors) for name in PORTFOLIO_URL_FIELDS}
    technologies = normalize_technologies(raw.get("technologies"))
    if not technologies:
        errors.setdefault("technologies", []).append(TECHNOLOGIES_REQUIRED)

    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(record=PortfolioRecord(
        title=text["title"],
        description=text["description"],
        technologies=technologies,
        featured=_as_bool(raw.get("featured", False)),
        **urls,
    ))


def check_portfolio_record(record: PortfolioRecord) -> ValidationResult[PortfolioRecord]:
    """Re-run the Portfolio rules on a built record, yielding its normalized form."""
    return validate_portfolio(asdict(record))


# --- Experience ------------------------------------------------------------------------

def validate_experience(raw: Mapping[str, Any]) -> ValidationResult[ExperienceRecord]:
    """Validate raw Experience input (form or API) into an ExperienceRecord."""
    errors: dict[str, list[str]] = {}
    text = _require(raw, _EXPERIENCE_REQUIRED, errors)
    current = _as_bool(raw.get("current", False))

    start_date = _parse_date(raw.get("start_date"))
    if start_date is None:
        message = (
            "Start date must be a valid date" if _clean_text(raw.get("start_date"))
            else "Start date is required"
        )
        errors.setdefault("start_date", []).append(message)

    end_date = None
    if not current:
        end_date = _parse_date(raw.get("end_date"))
        if end_date is None and _clean_text(raw.get("end_date")):
            errors.setdefault("end_date", []).append("End date must be a valid date")
        elif end_date and start_date and end_date < start_date:
            errors.setdefault("end_date", []).append(
                "End date cannot be before start date",
            )

    technologies = normalize_technologies(raw.get("technologies"))
    if not technologies:
        errors.setdefault("technologies", []).append(TECHNOLOGIES_REQUIRED)

    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(record=ExperienceRecord(
        title=text["title"],
        company=text["company"],
        location=text["location"],
        description=text["description"],
        start_date=start_date,
        end_date=end_date,
        current=current,
        technologies=technologies,
    ))


def check_experience_record(record: ExperienceRecord) -> ValidationResult[ExperienceRecord]:
    """Re-run the Experience rules on a built record, yielding its normalized form."""
    return validate_experience(asdict(record))
