"""Domain package for settlement rules and core models."""

from .constants import (
    DEFAULT_VOTE_DURATION_HOURS,
    PERCENT_TOLERANCE,
    PERCENT_TOTAL,
)
from .errors import (
    AccessDeniedError,
    ConflictError,
    NotFoundError,
    SettlementEngineError,
    ValidationError,
)
from .models import (
    DirectAllocation,
    DirectEntry,
    EqualAllocation,
    ItemAllocation,
    PercentAllocation,
    PercentEntry,
    Settlement,
    SettlementDetail,
    SettlementMethod,
    SettlementStatus,
    Vote,
    VoteOption,
)
from .services import (
    allocate_direct,
    allocate_equal,
    allocate_percent,
    net_item_shares,
)

__all__ = [
    "DEFAULT_VOTE_DURATION_HOURS",
    "PERCENT_TOLERANCE",
    "PERCENT_TOTAL",
    "AccessDeniedError",
    "ConflictError",
    "NotFoundError",
    "SettlementEngineError",
    "ValidationError",
    "DirectAllocation",
    "DirectEntry",
    "EqualAllocation",
    "ItemAllocation",
    "PercentAllocation",
    "PercentEntry",
    "Settlement",
    "SettlementDetail",
    "SettlementMethod",
    "SettlementStatus",
    "Vote",
    "VoteOption",
    "allocate_direct",
    "allocate_equal",
    "allocate_percent",
    "net_item_shares",
]
