"""Experience ORM - persisted work-experience entry.

Invariants:
    - current=True rows never carry an end_date (cleared by validation)
    - start_date required; list_all orders by it, newest first

Design Decisions:
    - Date columns (not strings): ordering by start_date is chronological
"""

from datetime import date

from sqlalchemy import JSON, Boolean, Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from folio.db.base import Base
from folio.models._columns import ResourceColumns


class Experience(ResourceColumns, Base):
    """Work-experience entry (one role at one company)."""
    __tablename__ = "experiences"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    company: Mapped[str] = mapped_column(String(200), nullable=False)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    current: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    technologies: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
