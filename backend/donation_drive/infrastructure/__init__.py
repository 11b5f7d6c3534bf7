"""Infrastructure Layer — storage backends and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Every backend failure is mapped to StorageUnavailableError

Design Decisions:
    - One module per backend behind the DonationStore protocol
"""
