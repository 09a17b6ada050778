"""ORM Models - SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the aggregate root for achievements, credentials and tickets

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from marketplace.models.user import User  # noqa: F401
from marketplace.models.achievement import Achievement  # noqa: F401
from marketplace.models.credential import Credential  # noqa: F401
from marketplace.models.event import Event  # noqa: F401
from marketplace.models.ticket import Ticket  # noqa: F401
