"""Portfolio Schemas - PortfolioInput and the persisted Portfolio shape.

Invariants:
    - PortfolioInput carries no id or timestamps (server-assigned)
    - Missing strings default to "" so the Validation Layer reports them per field
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from folio.schemas.common import CamelModel


class PortfolioInput(CamelModel):
    """Full input for createPortfolio / updatePortfolio."""
    title: str = ""
    description: str = ""
    image_url: str | None = None
    project_url: str | None = None
    github_url: str | None = None
    technologies: list[str] = Field(default_factory=list)
    featured: bool = False


class PortfolioResponse(CamelModel):
    """Persisted portfolio project."""
    id: UUID
    title: str
    description: str
    image_url: str | None = None
    project_url: str | None = None
    github_url: str | None = None
    technologies: list[str]
    featured: bool
    created_at: datetime
    updated_at: datetime
