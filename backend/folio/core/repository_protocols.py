"""Boundary Protocols - contracts between the core and the storage shell.

Invariants:
    - Core never imports from the shell; dependency arrows point inward only
    - One ResourceStore contract, two implementations (Portfolio, Experience)
    - Missing ids raise ResourceNotFoundError, never return None

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy required
    - Async in Protocol: implementations do IO; the core functions that use the
      returned rows stay synchronous
"""

from datetime import date, datetime
from typing import Protocol, TypeVar
from uuid import UUID

RecordT = TypeVar("RecordT", contravariant=True)


class StoredResource(Protocol):
    """Structural contract for persisted rows handed to the API layer."""
    id: UUID
    technologies: list
    created_at: datetime
    updated_at: datetime


class StoredExperience(StoredResource, Protocol):
    start_date: date
    end_date: date | None
    current: bool


class ResourceStore(Protocol[RecordT]):
    """Contract for one resource collection - implemented by the shell."""
    async def create(self, record: RecordT) -> StoredResource: ...
    async def list_all(self) -> list[StoredResource]: ...
    async def get_by_id(self, resource_id: UUID) -> StoredResource: ...
    async def update_by_id(
        self, resource_id: UUID, record: RecordT,
    ) -> StoredResource: ...
    async def delete_by_id(self, resource_id: UUID) -> bool: ...
