"""Domain services package."""

from .allocation import allocate_direct, allocate_equal, allocate_percent
from .item_netting import net_item_shares
from .validation import (
    validate_direct_entries,
    validate_percent_entries,
    validate_unique_users,
)

__all__ = [
    "allocate_equal",
    "allocate_direct",
    "allocate_percent",
    "net_item_shares",
    "validate_unique_users",
    "validate_direct_entries",
    "validate_percent_entries",
]
