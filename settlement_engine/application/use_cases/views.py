"""Builders turning aggregates into use-case results."""

from settlement_engine.application.ports.collaborators import UserDirectoryPort
from settlement_engine.domain.errors import NotFoundError
from settlement_engine.domain.models.expense import ExpenseSnapshot
from settlement_engine.domain.models.settlement import (
    Settlement,
    SettlementDetail,
)
from settlement_engine.domain.models.views import SettlementView, TransferView


class DisplayNames:
    """Per-call cache of user display names."""

    def __init__(self, users: UserDirectoryPort) -> None:
        self._users = users
        self._names: dict[int, str] = {}

    def __call__(self, user_id: int) -> str:
        if user_id not in self._names:
            user = self._users.get_user(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            self._names[user_id] = user.display_name
        return self._names[user_id]


def build_transfer_view(
    detail: SettlementDetail,
    names: DisplayNames,
) -> TransferView:
    return TransferView(
        detail_id=detail.id,
        debtor_id=detail.debtor_id,
        debtor_name=names(detail.debtor_id),
        creditor_id=detail.creditor_id,
        creditor_name=names(detail.creditor_id),
        amount=detail.amount,
        sent=detail.sent,
    )


def build_settlement_view(
    settlement: Settlement,
    expense: ExpenseSnapshot,
    users: UserDirectoryPort,
    names: DisplayNames | None = None,
) -> SettlementView:
    """Return the settlement with display names for every transfer.

    ``names`` lets a caller reuse a cache it already filled.
    """
    names = names or DisplayNames(users)
    return SettlementView(
        settlement_id=settlement.id,
        expense_id=settlement.expense_id,
        method=settlement.method,
        status=settlement.status,
        total_amount=expense.amount,
        deadline=settlement.deadline,
        details=[
            build_transfer_view(detail, names)
            for detail in settlement.details
        ],
    )


__all__ = ["DisplayNames", "build_transfer_view", "build_settlement_view"]
