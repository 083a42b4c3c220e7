"""Portfolio ORM - persisted portfolio project.

Invariants:
    - id is UUID primary key assigned on insert
    - title/description non-nullable; technologies a non-empty JSON list
      (enforced by the store's record check before insert/update)
    - updated_at is bumped explicitly by the store on every update

Design Decisions:
    - JSON column for technologies: ordered list, read back as-is
    - created_at indexed: list_all orders by it
"""

from sqlalchemy import JSON, Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from folio.db.base import Base
from folio.models._columns import ResourceColumns


class Portfolio(ResourceColumns, Base):
    """Portfolio project showcased on the site."""
    __tablename__ = "portfolios"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    project_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    github_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    technologies: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    featured: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
