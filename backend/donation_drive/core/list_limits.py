"""List Limit Resolution — turns the raw ?limit= query value into a row count.

Invariants:
    - Result is always in [1, maximum]
    - Missing, non-numeric, zero or negative input resolves to default

Design Decisions:
    - Leading-integer parsing ("5abc" -> 5) matches what the dashboard has always sent
    - Capped at maximum: the "all donors" view asks for 1000, nothing legitimately asks for more
"""

import re

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def resolve_list_limit(raw: str | int | None, default: int = 10, maximum: int = 1000) -> int:
    """Resolve a list limit. Pure, never raises."""
    if raw is None or isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        value = raw
    else:
        match = _LEADING_INT.match(str(raw))
        if not match:
            return default
        value = int(match.group(1))
    if value < 1:
        return default
    return min(value, maximum)
