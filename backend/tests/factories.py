"""Test data builders shared across test layers."""

from donation_drive.core.domain_types import DonorDraft


def donation(**overrides) -> dict:
    """Valid registration form body; override fields per test."""
    body = {"fullName": "Asha Rao", "bloodGroup": "O-", "age": 22, "year": "SY"}
    body.update(overrides)
    return body


def candidate(**overrides) -> dict:
    """Valid validation-gate input (snake_case keys)."""
    data = {"full_name": "Asha Rao", "blood_group": "O-", "age": 22, "year": "SY"}
    data.update(overrides)
    return data


def draft(name: str = "Asha Rao", blood_group: str = "O-") -> DonorDraft:
    return DonorDraft(full_name=name, blood_group=blood_group, age=22, year="SY")
