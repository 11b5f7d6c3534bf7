"""Donation Validation Gate — checks a raw submission before it reaches storage.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Each check returns an error dict on violation, None on success
    - validate_donation chains all checks in a fixed order — first error wins
    - normalize_donation is only called on candidates that passed validation

Design Decisions:
    - Return dicts (not exceptions): the gate is usable outside a request
      (e.g. bulk import) without try/except plumbing; the registration service
      converts the dict into DonationRejectedError
    - Loosely-typed input: the form posts strings, JSON clients post numbers,
      so age parsing accepts both
"""

import re
from typing import Any

from donation_drive.core.domain_types import (
    ACADEMIC_YEAR_VALUES,
    BLOOD_GROUP_VALUES,
    MAX_DONOR_AGE,
    MIN_DONOR_AGE,
    MAX_NAME_LENGTH,
    MIN_NAME_LENGTH,
    DonorDraft,
)

REQUIRED_FIELDS = ("full_name", "blood_group", "age", "year")

# optional sign, 1-4 ASCII digits
_AGE_PATTERN = re.compile(r"[+-]?[0-9]{1,4}")


def _error(code: str, field: str, message: str) -> dict:
    return {
        "status": "error",
        "error_code": code,
        "field": field,
        "message": message,
    }


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def parse_age(value: Any) -> int | None:
    """Parse an age from int, integral float or decimal string. None if not integral."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if _AGE_PATTERN.fullmatch(text):
            return int(text)
    return None


def check_required_fields(candidate: dict) -> dict | None:
    """Rule 1: all four fields present and non-empty."""
    missing = [f for f in REQUIRED_FIELDS if _is_blank(candidate.get(f))]
    if missing:
        return _error(
            "FIELDS_REQUIRED", missing[0], "All fields are required",
        )
    return None


def check_name_length(candidate: dict) -> dict | None:
    """Rule 2: trimmed name is MIN_NAME_LENGTH..MAX_NAME_LENGTH characters."""
    name = candidate.get("full_name")
    if not isinstance(name, str) or len(name.strip()) < MIN_NAME_LENGTH:
        return _error(
            "NAME_TOO_SHORT", "full_name",
            f"Full name must be at least {MIN_NAME_LENGTH} characters",
        )
    if len(name.strip()) > MAX_NAME_LENGTH:
        return _error(
            "NAME_TOO_LONG", "full_name",
            f"Full name must not exceed {MAX_NAME_LENGTH} characters",
        )
    return None


def check_minimum_age(candidate: dict) -> dict | None:
    """Rule 3: age parses to an integer >= MIN_DONOR_AGE."""
    age = parse_age(candidate.get("age"))
    if age is None or age < MIN_DONOR_AGE:
        return _error(
            "AGE_BELOW_MINIMUM", "age",
            f"Donor must be at least {MIN_DONOR_AGE} years old",
        )
    return None


def check_maximum_age(candidate: dict) -> dict | None:
    """Rule 4: age <= MAX_DONOR_AGE (the 65 form ceiling is advisory only)."""
    age = parse_age(candidate.get("age"))
    if age is not None and age > MAX_DONOR_AGE:
        return _error(
            "AGE_ABOVE_MAXIMUM", "age",
            f"Donor age must not exceed {MAX_DONOR_AGE}",
        )
    return None


def check_blood_group(candidate: dict) -> dict | None:
    """Rule 5: exact, case-sensitive match against the 8 blood groups."""
    group = candidate.get("blood_group")
    if not isinstance(group, str) or group not in BLOOD_GROUP_VALUES:
        return _error("INVALID_BLOOD_GROUP", "blood_group", "Invalid blood group")
    return None


def check_academic_year(candidate: dict) -> dict | None:
    """Rule 6: year is one of FY, SY, TY, Final Year."""
    year = candidate.get("year")
    if not isinstance(year, str) or year not in ACADEMIC_YEAR_VALUES:
        return _error("INVALID_YEAR", "year", "Invalid year selection")
    return None


def validate_donation(candidate: dict) -> dict | None:
    """Chain all donation checks. Returns first error or None."""
    return (
        check_required_fields(candidate)
        or check_name_length(candidate)
        or check_minimum_age(candidate)
        or check_maximum_age(candidate)
        or check_blood_group(candidate)
        or check_academic_year(candidate)
    )


def normalize_donation(candidate: dict) -> DonorDraft:
    """Build the storage-ready draft: trimmed name, integer age."""
    return DonorDraft(
        full_name=candidate["full_name"].strip(),
        blood_group=candidate["blood_group"],
        age=parse_age(candidate["age"]),
        year=candidate["year"],
    )
