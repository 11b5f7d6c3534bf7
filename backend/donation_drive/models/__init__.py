"""ORM Models — SQLAlchemy declarative models for the relational store.

Invariants:
    - All models inherit from Base (db/base.py)
    - donors is append-only; stats holds a single row keyed by "global"

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete before create_all
"""

from donation_drive.models.donor import Donor  # noqa: F401
from donation_drive.models.stats import Stats  # noqa: F401
