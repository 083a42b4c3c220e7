"""ORM Models - SQLAlchemy declarative models for both resource collections.

Invariants:
    - All models inherit from Base (db/base.py)
    - Collections are independent: no foreign keys, no cross-kind transactions

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete for create_all and Alembic
"""

from folio.models.portfolio import Portfolio  # noqa: F401
from folio.models.experience import Experience  # noqa: F401
