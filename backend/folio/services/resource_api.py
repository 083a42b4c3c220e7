"""Resource API - closed set of typed operations per resource kind.

Invariants:
    - OPERATIONS enumerates every operation: name, kind, action, input, output,
      declared errors; nothing is dispatched dynamically
    - Input always passes the Validation Layer before reaching the store
    - Every failure leaving this layer is one of ResourceValidationError,
      ResourceNotFoundError, StoreUnavailableError, tagged with the operation
      name, resource kind and id
    - Unexpected exceptions are logged with detail and re-raised as
      StoreUnavailableError with a safe message

Design Decisions:
    - Generic ResourceAPI base + two variants (PortfolioAPI, ExperienceAPI)
    - Experience responses get duration/period computed here with an injectable
      "today", so aggregates stay pure and tests stay deterministic
"""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import date
from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel

from folio.core.aggregates import describe_experience
from folio.core.domain_types import ResourceKind, operation_name
from folio.core.errors import (
    ErrorContext, FolioError, ResourceNotFoundError, ResourceValidationError,
    StoreUnavailableError,
)
from folio.core.repository_protocols import ResourceStore, StoredExperience
from folio.core.validation import ValidationResult, validate_experience, validate_portfolio
from folio.schemas.common import DeleteResponse
from folio.schemas.experience import ExperienceInput, ExperienceResponse
from folio.schemas.portfolio import PortfolioInput, PortfolioResponse

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)


# --- Operation table ---------------------------------------------------------------

@dataclass(frozen=True)
class Operation:
    """Contract of one query/mutation."""
    name: str
    kind: ResourceKind
    action: str
    input_schema: type[BaseModel] | None
    output_schema: type | None
    errors: tuple[type[FolioError], ...]


_ACTIONS = ("list", "get", "create", "update", "delete")

_DECLARED_ERRORS: dict[str, tuple[type[FolioError], ...]] = {
    "list": (StoreUnavailableError,),
    "get": (ResourceNotFoundError, StoreUnavailableError),
    "create": (ResourceValidationError, StoreUnavailableError),
    "update": (ResourceValidationError, ResourceNotFoundError, StoreUnavailableError),
    "delete": (ResourceNotFoundError, StoreUnavailableError),
}

_SCHEMAS: dict[ResourceKind, tuple[type[BaseModel], type[BaseModel]]] = {
    ResourceKind.PORTFOLIO: (PortfolioInput, PortfolioResponse),
    ResourceKind.EXPERIENCE: (ExperienceInput, ExperienceResponse),
}


def _build_operations() -> dict[str, Operation]:
    operations = {}
    for kind, (input_schema, output_schema) in _SCHEMAS.items():
        for action in _ACTIONS:
            name = operation_name(kind, action)
            operations[name] = Operation(
                name=name,
                kind=kind,
                action=action,
                input_schema=input_schema if action in ("create", "update") else None,
                output_schema={
                    "list": list[output_schema],
                    "delete": DeleteResponse,
                }.get(action, output_schema),
                errors=_DECLARED_ERRORS[action],
            )
    return operations


OPERATIONS: dict[str, Operation] = _build_operations()

_STATUS: dict[type[FolioError], int] = {
    ResourceValidationError: 400,
    ResourceNotFoundError: 404,
    StoreUnavailableError: 503,
}


def error_responses(name: str) -> dict[int, dict]:
    """OpenAPI `responses=` entry for an operation's declared errors."""
    return {
        _STATUS[error]: {"description": error.__doc__ or error.__name__}
        for error in OPERATIONS[name].errors
    }


# --- Generic API ----------------------------------------------------------------------

class ResourceAPI(Generic[InputT, OutputT]):
    """Typed list/get/create/update/delete over one store."""

    kind: ResourceKind
    output_schema: type[OutputT]
    validate: Callable[[dict], ValidationResult]

    def __init__(self, store: ResourceStore):
        self._store = store

    @asynccontextmanager
    async def _operation(
        self, action: str, resource_id: UUID | None = None,
    ) -> AsyncIterator[None]:
        name = operation_name(self.kind, action)
        rid = str(resource_id) if resource_id is not None else None
        try:
            yield
        except FolioError as e:
            e.with_context(operation=name, resource_kind=self.kind.value, resource_id=rid)
            logger.warning(
                f"{name} failed: {e.code}",
                extra={
                    "operation": name, "resource_kind": self.kind.value,
                    "resource_id": rid, "error_code": e.code,
                },
            )
            raise
        except Exception as e:
            logger.error(
                f"{name} failed unexpectedly: {e}",
                exc_info=True,
                extra={"operation": name, "resource_kind": self.kind.value},
            )
            raise StoreUnavailableError(
                name,
                ErrorContext(
                    operation=name, resource_kind=self.kind.value, resource_id=rid,
                ),
            ) from e

    def _to_record(self, body: InputT) -> Any:
        result = self.validate(body.model_dump())
        if not result.ok:
            raise ResourceValidationError(result.errors)
        return result.record

    def _to_output(self, row: Any) -> OutputT:
        return self.output_schema.model_validate(row)

    async def list_all(self) -> list[OutputT]:
        async with self._operation("list"):
            rows = await self._store.list_all()
            return [self._to_output(row) for row in rows]

    async def get(self, resource_id: UUID) -> OutputT:
        async with self._operation("get", resource_id):
            row = await self._store.get_by_id(resource_id)
            return self._to_output(row)

    async def create(self, body: InputT) -> OutputT:
        async with self._operation("create"):
            row = await self._store.create(self._to_record(body))
            return self._to_output(row)

    async def update(self, resource_id: UUID, body: InputT) -> OutputT:
        async with self._operation("update", resource_id):
            row = await self._store.update_by_id(resource_id, self._to_record(body))
            return self._to_output(row)

    async def delete(self, resource_id: UUID) -> DeleteResponse:
        async with self._operation("delete", resource_id):
            deleted = await self._store.delete_by_id(resource_id)
        return DeleteResponse(id=resource_id, deleted=deleted)


class PortfolioAPI(ResourceAPI[PortfolioInput, PortfolioResponse]):
    kind = ResourceKind.PORTFOLIO
    output_schema = PortfolioResponse
    validate = staticmethod(validate_portfolio)


class ExperienceAPI(ResourceAPI[ExperienceInput, ExperienceResponse]):
    kind = ResourceKind.EXPERIENCE
    output_schema = ExperienceResponse
    validate = staticmethod(validate_experience)

    def __init__(self, store: ResourceStore, today: Callable[[], date] = date.today):
        super().__init__(store)
        self._today = today

    def _to_output(self, row: StoredExperience) -> ExperienceResponse:
        response = ExperienceResponse.model_validate(row)
        return response.model_copy(update=describe_experience(row, self._today()))
