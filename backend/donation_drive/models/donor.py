"""Donor ORM — the append-only donor log for the relational store.

Invariants:
    - Rows are inserted once and never updated or deleted
    - CHECK constraints mirror the validation gate (blood group, age 18..100,
      year, trimmed name length >= 2) so direct SQL writes cannot bypass them
    - donated_at is always set by the store, never by the client

Design Decisions:
    - Integer autoincrement id: opaque to clients, exposed as a string
    - Index on donated_at: the roster query sorts by it on every dashboard poll
    - Index on blood_group: per-group breakdowns without a full scan
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from donation_drive.core.domain_types import (
    ACADEMIC_YEAR_VALUES, BLOOD_GROUP_VALUES, MAX_DONOR_AGE, MIN_DONOR_AGE,
    MAX_NAME_LENGTH, MIN_NAME_LENGTH,
)
from donation_drive.db.base import Base


def _in_list(column: str, values: frozenset[str]) -> str:
    quoted = ", ".join(f"'{v}'" for v in sorted(values))
    return f"{column} IN ({quoted})"


class Donor(Base):
    """One registered donation."""
    __tablename__ = "donors"
    __table_args__ = (
        CheckConstraint(
            _in_list("blood_group", BLOOD_GROUP_VALUES), name="valid_blood_group",
        ),
        CheckConstraint(
            f"age >= {MIN_DONOR_AGE} AND age <= {MAX_DONOR_AGE}", name="valid_age",
        ),
        CheckConstraint(_in_list("year", ACADEMIC_YEAR_VALUES), name="valid_year"),
        CheckConstraint(
            f"length(trim(full_name)) >= {MIN_NAME_LENGTH}", name="valid_name",
        ),
        Index("idx_donors_donated_at", "donated_at"),
        Index("idx_donors_blood_group", "blood_group"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    full_name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    blood_group: Mapped[str] = mapped_column(String(5), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[str] = mapped_column(String(20), nullable=False)
    donated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
