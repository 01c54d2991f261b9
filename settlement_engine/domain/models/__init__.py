"""Domain models package."""

from .allocation import (
    Allocation,
    DirectAllocation,
    DirectEntry,
    EqualAllocation,
    ItemAllocation,
    PercentAllocation,
    PercentEntry,
)
from .expense import ExpenseItem, ExpenseSnapshot, UserProfile
from .settlement import (
    Settlement,
    SettlementDetail,
    SettlementDraft,
    SettlementMethod,
    SettlementStatus,
    Share,
)
from .views import (
    CastVoteResult,
    MarkSentResult,
    OptionTally,
    PendingTransfer,
    SettlementSummary,
    SettlementView,
    TransferView,
    VoteOptionView,
    VoteStatusView,
    VoteView,
)
from .vote import CastAction, ItemTally, Vote, VoteOption

__all__ = [
    "Allocation",
    "DirectAllocation",
    "DirectEntry",
    "EqualAllocation",
    "ItemAllocation",
    "PercentAllocation",
    "PercentEntry",
    "ExpenseItem",
    "ExpenseSnapshot",
    "UserProfile",
    "Settlement",
    "SettlementDetail",
    "SettlementDraft",
    "SettlementMethod",
    "SettlementStatus",
    "Share",
    "CastVoteResult",
    "MarkSentResult",
    "OptionTally",
    "PendingTransfer",
    "SettlementSummary",
    "SettlementView",
    "TransferView",
    "VoteOptionView",
    "VoteStatusView",
    "VoteView",
    "CastAction",
    "ItemTally",
    "Vote",
    "VoteOption",
]
