"""Domain Types - typed records and enums shared by validation, store and client.

Invariants:
    - PortfolioRecord / ExperienceRecord are always normalized (trimmed strings,
      no empty technologies, end_date cleared when current)
    - Records never carry server-assigned fields (id, created_at, updated_at)
    - ResourceKind is the closed set of managed kinds

Design Decisions:
    - str Enums: serialize to JSON and log extras without custom encoders
    - Plain dataclasses over ORM rows: core stays independent of the storage engine
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


# --- Enums --------------------------------------------------------------------

class ResourceKind(str, Enum):
    """The two managed resource kinds."""
    PORTFOLIO = "portfolio"
    EXPERIENCE = "experience"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class SubmitAction(str, Enum):
    """What a form submit resolves to."""
    CREATE = "create"
    UPDATE = "update"


# --- Records ------------------------------------------------------------------

@dataclass
class PortfolioRecord:
    """Normalized Portfolio input, ready for persistence."""
    title: str
    description: str
    technologies: list[str] = field(default_factory=list)
    image_url: str | None = None
    project_url: str | None = None
    github_url: str | None = None
    featured: bool = False


@dataclass
class ExperienceRecord:
    """Normalized Experience input, ready for persistence."""
    title: str
    company: str
    location: str
    start_date: date
    description: str
    technologies: list[str] = field(default_factory=list)
    end_date: date | None = None
    current: bool = False


PORTFOLIO_URL_FIELDS = ("image_url", "project_url", "github_url")

_PLURALS = {ResourceKind.PORTFOLIO: "Portfolios", ResourceKind.EXPERIENCE: "Experiences"}


def operation_name(kind: ResourceKind, action: str) -> str:
    """listPortfolios, getPortfolio, createExperience, ..."""
    noun = _PLURALS[kind] if action == "list" else kind.label
    return f"{action}{noun}"
