"""Donation Schemas — transport shape of the registration form.

Invariants:
    - DonationSubmission accepts any JSON value per field; the validation gate,
      not Pydantic, decides what is acceptable so rejection messages stay specific
    - Field names on the wire are camelCase (fullName, bloodGroup)

Design Decisions:
    - Field(alias=...) + populate_by_name: wire names camelCase, Python names snake_case
    - extra="ignore": the form may post submit-button or honeypot fields
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DonationSubmission(BaseModel):
    """Raw registration form body."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    full_name: Any = Field(None, alias="fullName")
    blood_group: Any = Field(None, alias="bloodGroup")
    age: Any = None
    year: Any = None

    def to_candidate(self) -> dict:
        """Snake_case dict consumed by validate_donation."""
        return self.model_dump(by_alias=False)
