"""Stats ORM — singleton aggregate row caching the donor count.

Invariants:
    - Exactly one row is used, identifier == "global"
    - total_blood_units >= 0 (CHECK)
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from donation_drive.db.base import Base


class Stats(Base):
    """Aggregate total, maintained by increment and repaired by recount."""
    __tablename__ = "stats"
    __table_args__ = (
        CheckConstraint("total_blood_units >= 0", name="non_negative_total"),
    )

    identifier: Mapped[str] = mapped_column(String(50), primary_key=True)
    total_blood_units: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    last_updated: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
