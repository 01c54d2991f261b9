"""Domain constants for settlement computation."""

from decimal import Decimal

PERCENT_TOTAL = Decimal("100")
PERCENT_TOLERANCE = Decimal("0.01")

DEFAULT_VOTE_DURATION_HOURS = 24


__all__ = [
    "PERCENT_TOTAL",
    "PERCENT_TOLERANCE",
    "DEFAULT_VOTE_DURATION_HOURS",
]
