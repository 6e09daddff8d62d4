"""ORM Models — SQLAlchemy declarative models for users and notes.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from notes_api.models.user import User  # noqa: F401
from notes_api.models.note import Note  # noqa: F401
