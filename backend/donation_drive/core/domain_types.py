"""Domain Types — enumerations, constants and immutable records for donations.

Invariants:
    - BloodGroup and AcademicYear values are the canonical, case-sensitive strings
    - Records are frozen dataclasses: a donor is never mutated after creation
    - StatsSnapshot.total is never negative

Design Decisions:
    - str Enums: serialize to JSON and compare against raw request strings
    - Server age ceiling (100) kept apart from the form's advisory ceiling (65);
      only the former is enforced server-side
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


# ─── Constants ───────────────────────────────────────────────────

STATS_IDENTIFIER = "global"

MIN_DONOR_AGE = 18
MAX_DONOR_AGE = 100
ADVISORY_MAX_DONOR_AGE = 65   # registration form ceiling, not enforced here

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 255   # donors.full_name VARCHAR(255)


# ─── Enums ───────────────────────────────────────────────────────

class BloodGroup(str, Enum):
    """The 8 ABO/Rh blood groups accepted at registration."""
    A_POS = "A+"
    A_NEG = "A-"
    B_POS = "B+"
    B_NEG = "B-"
    AB_POS = "AB+"
    AB_NEG = "AB-"
    O_POS = "O+"
    O_NEG = "O-"


class AcademicYear(str, Enum):
    """Academic year tag of the donating student."""
    FIRST = "FY"
    SECOND = "SY"
    THIRD = "TY"
    FINAL = "Final Year"


BLOOD_GROUP_VALUES = frozenset(g.value for g in BloodGroup)
ACADEMIC_YEAR_VALUES = frozenset(y.value for y in AcademicYear)


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class DonorDraft:
    """A validated, normalized submission not yet persisted."""
    full_name: str
    blood_group: str
    age: int
    year: str


@dataclass(frozen=True)
class DonorRecord:
    """A persisted donor. id is opaque (row id or ObjectId as string)."""
    id: str
    full_name: str
    blood_group: str
    age: int
    year: str
    donated_at: datetime


@dataclass(frozen=True)
class DonorSummary:
    """Public projection used by the donor roster."""
    full_name: str
    blood_group: str
    donated_at: datetime

    def to_public(self) -> dict:
        return {
            "fullName": self.full_name,
            "bloodGroup": self.blood_group,
            "donatedAt": self.donated_at,
        }


@dataclass(frozen=True)
class StatsSnapshot:
    """Current value of the aggregate. last_updated is None if never written."""
    total: int = 0
    last_updated: datetime | None = None
