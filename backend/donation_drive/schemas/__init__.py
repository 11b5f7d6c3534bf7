"""Pydantic Schemas — request validation at the API boundary.

Invariants:
    - Schemas only shape transport data; domain rules live in core/

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
