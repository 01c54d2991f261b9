"""Settlement aggregate: a settlement and its directed transfers."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

from settlement_engine.domain.errors import ValidationError


class SettlementMethod(str, Enum):
    """Allocation strategy used to compute a settlement."""

    EQUAL = "EQUAL"
    DIRECT = "DIRECT"
    PERCENT = "PERCENT"
    ITEM = "ITEM"


class SettlementStatus(str, Enum):
    """Lifecycle status of a settlement. COMPLETED is terminal."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


@dataclass(frozen=True)
class Share:
    """Amount a single debtor owes, before a creditor is attached."""

    debtor_id: int
    amount: int


@dataclass(frozen=True)
class SettlementDetail:
    """One directed transfer: debtor owes creditor ``amount``."""

    id: int | None
    settlement_id: int | None
    debtor_id: int
    creditor_id: int
    amount: int
    sent: bool = False

    def __post_init__(self) -> None:
        if self.debtor_id == self.creditor_id:
            raise ValidationError(
                f"Self-transfer is not allowed for user {self.debtor_id}"
            )
        if self.amount <= 0:
            raise ValidationError(
                f"Transfer amount must be positive, got {self.amount} "
                f"for debtor {self.debtor_id}"
            )

    def mark_sent(self) -> "SettlementDetail":
        """Return a copy of the detail flagged as sent."""
        return replace(self, sent=True)


@dataclass(frozen=True)
class Settlement:
    """Settlement for one expense, holding its details."""

    id: int | None
    expense_id: int
    method: SettlementMethod
    status: SettlementStatus = SettlementStatus.PENDING
    deadline: datetime | None = None
    details: tuple[SettlementDetail, ...] = field(default_factory=tuple)

    @property
    def is_completed(self) -> bool:
        return self.status is SettlementStatus.COMPLETED

    def detail(self, detail_id: int) -> SettlementDetail | None:
        for detail in self.details:
            if detail.id == detail_id:
                return detail
        return None

    def detail_for_pair(
        self,
        debtor_id: int,
        creditor_id: int,
    ) -> SettlementDetail | None:
        for detail in self.details:
            if (
                detail.debtor_id == debtor_id
                and detail.creditor_id == creditor_id
            ):
                return detail
        return None


@dataclass(frozen=True)
class SettlementDraft:
    """Validated settlement content waiting to be persisted."""

    expense_id: int
    method: SettlementMethod
    creditor_id: int
    shares: tuple[Share, ...]
    deadline: datetime | None = None

    @property
    def initial_status(self) -> SettlementStatus:
        """Return COMPLETED when nothing has to be transferred."""
        if self.shares:
            return SettlementStatus.PENDING
        return SettlementStatus.COMPLETED

    def details(self) -> tuple[SettlementDetail, ...]:
        """Build unsaved detail rows, one per share."""
        return tuple(
            SettlementDetail(
                id=None,
                settlement_id=None,
                debtor_id=share.debtor_id,
                creditor_id=self.creditor_id,
                amount=share.amount,
            )
            for share in self.shares
        )


__all__ = [
    "SettlementMethod",
    "SettlementStatus",
    "Share",
    "SettlementDetail",
    "Settlement",
    "SettlementDraft",
]
