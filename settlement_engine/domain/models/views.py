"""Serializable results returned by use cases."""

from dataclasses import dataclass
from datetime import datetime

from settlement_engine.domain.models.settlement import (
    SettlementMethod,
    SettlementStatus,
)
from settlement_engine.domain.models.vote import CastAction


@dataclass(frozen=True)
class TransferView:
    """Transfer with resolved display names."""

    detail_id: int
    debtor_id: int
    debtor_name: str
    creditor_id: int
    creditor_name: str
    amount: int
    sent: bool


@dataclass(frozen=True)
class SettlementView:
    """Settlement with its transfer list."""

    settlement_id: int
    expense_id: int
    method: SettlementMethod
    status: SettlementStatus
    total_amount: int
    deadline: datetime | None
    details: list[TransferView]


@dataclass(frozen=True)
class MarkSentResult:
    """Outcome of confirming one transfer.

    Attributes:
        detail: Transfer after the update.
        settlement_status: Settlement status after the update.
        already_sent: True when the transfer had been confirmed before and
            nothing was written.
    """

    detail: TransferView
    settlement_status: SettlementStatus
    already_sent: bool = False

    @property
    def settlement_completed(self) -> bool:
        return self.settlement_status is SettlementStatus.COMPLETED


@dataclass(frozen=True)
class SettlementSummary:
    """Open balances of one user across unsent transfers."""

    user_id: int
    to_receive: int
    to_send: int

    @property
    def net(self) -> int:
        return self.to_receive - self.to_send


@dataclass(frozen=True)
class PendingTransfer:
    """Unsent outgoing transfer of a user."""

    settlement_id: int
    detail_id: int
    expense_id: int
    creditor_id: int
    creditor_name: str
    amount: int


@dataclass(frozen=True)
class VoteOptionView:
    """Option as presented when a vote is created."""

    option_id: int
    item_name: str
    price: int


@dataclass(frozen=True)
class VoteView:
    """Vote with its options."""

    vote_id: int
    expense_id: int
    closed: bool
    close_at: datetime | None
    options: list[VoteOptionView]


@dataclass(frozen=True)
class CastVoteResult:
    """Outcome of a toggle cast."""

    action: CastAction
    item_name: str
    all_participants_voted: bool = False


@dataclass(frozen=True)
class OptionTally:
    """Option with the users currently holding a vote on it."""

    option_id: int
    item_name: str
    price: int
    voter_ids: list[int]


@dataclass(frozen=True)
class VoteStatusView:
    """Per-option voters and participants who have not voted at all."""

    vote_id: int
    expense_id: int
    closed: bool
    close_at: datetime | None
    per_option: list[OptionTally]
    non_voter_ids: list[int]


__all__ = [
    "TransferView",
    "SettlementView",
    "MarkSentResult",
    "SettlementSummary",
    "PendingTransfer",
    "VoteOptionView",
    "VoteView",
    "CastVoteResult",
    "OptionTally",
    "VoteStatusView",
]
