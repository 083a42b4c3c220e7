"""Experience Schemas - ExperienceInput and the persisted Experience shape.

Invariants:
    - ExperienceInput carries no id or timestamps (server-assigned)
    - Response duration fields are derived at response time, never stored
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import Field

from folio.schemas.common import CamelModel


class ExperienceInput(CamelModel):
    """Full input for createExperience / updateExperience."""
    title: str = ""
    company: str = ""
    location: str = ""
    start_date: date | None = None
    end_date: date | None = None
    current: bool = False
    description: str = ""
    technologies: list[str] = Field(default_factory=list)


class ExperienceResponse(CamelModel):
    """Persisted experience entry plus derived display fields."""
    id: UUID
    title: str
    company: str
    location: str
    start_date: date
    end_date: date | None = None
    current: bool
    description: str
    technologies: list[str]
    created_at: datetime
    updated_at: datetime
    duration_months: int | None = None
    duration_label: str | None = None
    period: str | None = None
