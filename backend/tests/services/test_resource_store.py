"""Resource Store - CRUD semantics against a real SQLite database.

Invariants:
    - create assigns id and timestamps; get returns an equal record
    - update is full replacement and always bumps updated_at
    - a second delete of the same id is not-found
    - ordering: portfolios newest first, experiences by start_date desc
"""

from datetime import date
from uuid import uuid4

import pytest

from folio.core.domain_types import ExperienceRecord, PortfolioRecord
from folio.core.errors import ResourceNotFoundError, ResourceValidationError
from folio.services.resource_store import ExperienceStore, PortfolioStore


@pytest.fixture
def portfolio_store(db_manager):
    return PortfolioStore(db_manager)


@pytest.fixture
def experience_store(db_manager):
    return ExperienceStore(db_manager)


def _portfolio(title="Folio", **overrides):
    fields = {
        "title": title,
        "description": "Personal site",
        "technologies": ["React"],
        "github_url": "https://github.com/example/folio",
    }
    fields.update(overrides)
    return PortfolioRecord(**fields)


def _experience(start=date(2020, 1, 1), **overrides):
    fields = {
        "title": "Engineer",
        "company": "Acme",
        "location": "Remote",
        "start_date": start,
        "description": "Billing",
        "technologies": ["Python"],
    }
    fields.update(overrides)
    return ExperienceRecord(**fields)


async def test_list_empty_collection(portfolio_store):
    assert await portfolio_store.list_all() == []


async def test_create_then_get_returns_equal_fields(portfolio_store):
    created = await portfolio_store.create(_portfolio())
    fetched = await portfolio_store.get_by_id(created.id)
    assert fetched.id == created.id
    assert fetched.title == "Folio"
    assert fetched.technologies == ["React"]
    assert fetched.github_url == "https://github.com/example/folio"
    assert fetched.image_url is None
    assert fetched.created_at is not None


async def test_create_rejects_invalid_record_before_sql(portfolio_store):
    with pytest.raises(ResourceValidationError) as exc_info:
        await portfolio_store.create(_portfolio(title=" "))
    assert "title" in exc_info.value.fields
    assert await portfolio_store.list_all() == []


async def test_update_replaces_every_field(portfolio_store):
    created = await portfolio_store.create(_portfolio(featured=True))
    updated = await portfolio_store.update_by_id(
        created.id, _portfolio(title="Renamed", github_url=None, technologies=["Go"]),
    )
    assert updated.id == created.id
    assert updated.title == "Renamed"
    assert updated.github_url is None
    assert updated.featured is False
    assert updated.technologies == ["Go"]
    assert updated.created_at == created.created_at


async def test_update_bumps_updated_at_even_without_changes(portfolio_store):
    created = await portfolio_store.create(_portfolio())
    first_updated_at = created.updated_at
    updated = await portfolio_store.update_by_id(created.id, _portfolio())
    assert updated.updated_at > first_updated_at


async def test_update_missing_id_not_found(portfolio_store):
    with pytest.raises(ResourceNotFoundError):
        await portfolio_store.update_by_id(uuid4(), _portfolio())


async def test_get_missing_id_not_found(experience_store):
    missing = uuid4()
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await experience_store.get_by_id(missing)
    assert exc_info.value.message == f"Experience '{missing}' not found"
    assert exc_info.value.context.operation == "getExperience"


async def test_second_delete_is_not_found(portfolio_store):
    created = await portfolio_store.create(_portfolio())
    assert await portfolio_store.delete_by_id(created.id) is True
    with pytest.raises(ResourceNotFoundError):
        await portfolio_store.delete_by_id(created.id)
    with pytest.raises(ResourceNotFoundError):
        await portfolio_store.get_by_id(created.id)


async def test_portfolios_listed_newest_first(portfolio_store):
    first = await portfolio_store.create(_portfolio("First"))
    second = await portfolio_store.create(_portfolio("Second"))
    listed = await portfolio_store.list_all()
    assert [p.id for p in listed] == [second.id, first.id]


async def test_experiences_listed_by_start_date_desc(experience_store):
    older = await experience_store.create(_experience(date(2018, 3, 1)))
    newer = await experience_store.create(_experience(date(2021, 6, 1)))
    middle = await experience_store.create(_experience(date(2019, 9, 1)))
    listed = await experience_store.list_all()
    assert [e.id for e in listed] == [newer.id, middle.id, older.id]


async def test_current_experience_stored_without_end_date(experience_store):
    created = await experience_store.create(
        _experience(current=True, end_date=date(2022, 1, 1)),
    )
    fetched = await experience_store.get_by_id(created.id)
    assert fetched.current is True
    assert fetched.end_date is None
