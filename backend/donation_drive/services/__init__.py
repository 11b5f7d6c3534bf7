"""Services Layer — donation registration and aggregate reconciliation.

Invariants:
    - Services depend on the DonationStore protocol, never on a concrete backend
    - Services raise domain errors; routes shape the responses

Design Decisions:
    - One module per use case for locality
"""
