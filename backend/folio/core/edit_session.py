"""Edit Session - per-form state machine: creating a new record vs editing one.

Invariants:
    - Initial state is Creating with blank default fields
    - begin_edit() replaces the target AND every field (no stale values survive)
    - While Editing(id), submit_action() is always (UPDATE, id);
      while Creating, it is always (CREATE, None)
    - reset() (success or cancel) returns to Creating and clears all fields

Design Decisions:
    - Pure dataclass, no IO: ResourceForm in folio.client drives it
    - Fields use the form shape (technologies as one comma-separated string),
      the Validation Layer turns them into records on submit
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any
from uuid import UUID

from folio.core.domain_types import ResourceKind, SubmitAction

_PORTFOLIO_DEFAULTS = {
    "title": "",
    "description": "",
    "image_url": "",
    "project_url": "",
    "github_url": "",
    "technologies": "",
    "featured": False,
}

_EXPERIENCE_DEFAULTS = {
    "title": "",
    "company": "",
    "location": "",
    "start_date": "",
    "end_date": "",
    "current": False,
    "description": "",
    "technologies": "",
}


def blank_fields(kind: ResourceKind) -> dict[str, Any]:
    """Fresh default form fields for a resource kind."""
    if kind == ResourceKind.PORTFOLIO:
        return dict(_PORTFOLIO_DEFAULTS)
    return dict(_EXPERIENCE_DEFAULTS)


def _read(entity: Any, name: str) -> Any:
    if isinstance(entity, dict):
        return entity.get(name)
    return getattr(entity, name, None)


def fields_from_entity(kind: ResourceKind, entity: Any) -> dict[str, Any]:
    """Seed form fields from a listed entity (dict, response model or row)."""
    seeded = blank_fields(kind)
    for name in seeded:
        value = _read(entity, name)
        if value is None:
            continue
        if name == "technologies":
            value = ", ".join(value)
        elif isinstance(value, date):
            value = value.isoformat()
        seeded[name] = value
    return seeded


@dataclass
class EditSession:
    """Create/edit state for one form."""
    kind: ResourceKind
    editing_id: UUID | None = None
    fields: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.fields:
            self.fields = blank_fields(self.kind)

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    @property
    def mode_label(self) -> str:
        return "Editing" if self.is_editing else "Creating"

    def begin_edit(self, entity: Any) -> None:
        """Creating -> Editing(id), or retarget Editing(a) -> Editing(b)."""
        entity_id = _read(entity, "id")
        if entity_id is None:
            raise ValueError("entity has no id")
        self.editing_id = entity_id if isinstance(entity_id, UUID) else UUID(str(entity_id))
        self.fields = fields_from_entity(self.kind, entity)

    def update_field(self, name: str, value: Any) -> None:
        if name not in self.fields:
            raise KeyError(f"unknown field '{name}' for {self.kind.value}")
        self.fields[name] = value

    def reset(self) -> None:
        """Any state -> Creating, fields cleared."""
        self.editing_id = None
        self.fields = blank_fields(self.kind)

    cancel = reset

    def submit_action(self) -> tuple[SubmitAction, UUID | None]:
        if self.editing_id is not None:
            return SubmitAction.UPDATE, self.editing_id
        return SubmitAction.CREATE, None
