"""Resource Form - drives an EditSession through validation and mutation.

Invariants:
    - At most one mutation in flight per form; a submit while busy is refused
      (FormBusyError on .error) and leaves the session untouched
    - Editing(id) submits update(id); Creating submits create
    - Success resets the session to Creating unless another entity was selected
      while the mutation was in flight; failure keeps every field and exposes
      error / field_errors
    - Invalid fields never reach the client (Validation Layer runs first)
"""

import asyncio
import logging
from functools import partial
from typing import Any
from uuid import UUID

from folio.client.api_client import FolioClient
from folio.client.list_view import RefetchCoordinator
from folio.core.domain_types import ResourceKind, SubmitAction
from folio.core.edit_session import EditSession
from folio.core.errors import FolioError, FormBusyError, ResourceValidationError
from folio.core.validation import validate_experience, validate_portfolio

logger = logging.getLogger(__name__)

_VALIDATORS = {
    ResourceKind.PORTFOLIO: validate_portfolio,
    ResourceKind.EXPERIENCE: validate_experience,
}


class ResourceForm:
    """Create/edit form for one resource kind."""

    def __init__(
        self,
        kind: ResourceKind,
        client: FolioClient,
        coordinator: RefetchCoordinator,
    ):
        self.kind = kind
        self.session = EditSession(kind)
        self._client = client
        self._coordinator = coordinator
        self._lock = asyncio.Lock()
        self.error: FolioError | None = None
        self.field_errors: dict[str, list[str]] = {}

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @property
    def fields(self) -> dict[str, Any]:
        return self.session.fields

    def _clear_errors(self) -> None:
        self.error = None
        self.field_errors = {}

    def edit(self, entity: Any) -> None:
        """Select a listed entity for editing (replaces any previous target)."""
        self.session.begin_edit(entity)
        self._clear_errors()

    def set(self, name: str, value: Any) -> None:
        self.session.update_field(name, value)

    def cancel(self) -> None:
        self.session.cancel()
        self._clear_errors()

    async def submit(self) -> Any | None:
        """Validate and send. Returns the stored entity, or None on failure."""
        if self.busy:
            self.error = FormBusyError()
            return None

        async with self._lock:
            self._clear_errors()
            result = _VALIDATORS[self.kind](self.session.fields)
            if not result.ok:
                self.field_errors = result.errors
                return None

            action, target = self.session.submit_action()
            if action == SubmitAction.CREATE:
                mutation = partial(self._client.create, self.kind, result.record)
            else:
                mutation = partial(self._client.update, self.kind, target, result.record)

            try:
                stored = await self._coordinator.mutate(self.kind, mutation)
            except ResourceValidationError as e:
                self.error = e
                self.field_errors = e.fields
                return None
            except FolioError as e:
                logger.warning(
                    f"{action.value} failed: {e.code}",
                    extra={"resource_kind": self.kind.value, "error_code": e.code},
                )
                self.error = e
                return None

            if self.session.editing_id == target:
                self.session.reset()
            return stored

    async def delete(self, entity_id: UUID) -> bool:
        """Delete an entity; editing that same entity returns the form to Creating."""
        if self.busy:
            self.error = FormBusyError()
            return False

        async with self._lock:
            self._clear_errors()
            try:
                deleted = await self._coordinator.mutate(
                    self.kind, partial(self._client.delete, self.kind, entity_id),
                )
            except FolioError as e:
                self.error = e
                return False
            if self.session.editing_id == entity_id:
                self.session.reset()
            return deleted
