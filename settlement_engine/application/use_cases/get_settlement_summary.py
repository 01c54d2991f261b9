"""Use cases summarizing a user's open transfers across settlements."""

from settlement_engine.application.ports.collaborators import (
    ExpenseDirectoryPort,
    UserDirectoryPort,
)
from settlement_engine.application.ports.settlement_repository import (
    SettlementRepositoryPort,
)
from settlement_engine.application.use_cases.views import DisplayNames
from settlement_engine.domain.models.views import (
    PendingTransfer,
    SettlementSummary,
)


class GetSettlementSummaryUseCase:
    """Aggregate unsent transfers where the user is debtor or creditor."""

    def __init__(self, settlements: SettlementRepositoryPort) -> None:
        self._settlements = settlements

    def execute(self, user_id: int) -> SettlementSummary:
        """Return how much the user still has to receive and to send."""
        to_receive = 0
        to_send = 0
        rows = self._settlements.list_unsent_details_for_user(user_id)
        for _, detail in rows:
            if detail.creditor_id == user_id:
                to_receive += detail.amount
            elif detail.debtor_id == user_id:
                to_send += detail.amount
        return SettlementSummary(
            user_id=user_id,
            to_receive=to_receive,
            to_send=to_send,
        )


class ListPendingTransfersUseCase:
    """List the transfers a user still has to send."""

    def __init__(
        self,
        settlements: SettlementRepositoryPort,
        expenses: ExpenseDirectoryPort,
        users: UserDirectoryPort,
    ) -> None:
        self._settlements = settlements
        self._expenses = expenses
        self._users = users

    def execute(
        self,
        user_id: int,
        group_id: int | None = None,
    ) -> list[PendingTransfer]:
        """Return unsent outgoing transfers, optionally for one group.

        Args:
            user_id: Debtor whose transfers are listed.
            group_id: When set, keep only expenses of this group.

        Returns:
            list[PendingTransfer]: Transfers ordered by settlement then detail.
        """
        names = DisplayNames(self._users)
        group_by_expense: dict[int, int | None] = {}
        pending = []
        rows = self._settlements.list_unsent_details_for_user(user_id)
        for settlement, detail in rows:
            if detail.debtor_id != user_id:
                continue
            if group_id is not None:
                expense_id = settlement.expense_id
                if expense_id not in group_by_expense:
                    expense = self._expenses.get_expense(expense_id)
                    group_by_expense[expense_id] = (
                        expense.group_id if expense else None
                    )
                if group_by_expense[expense_id] != group_id:
                    continue
            pending.append(
                PendingTransfer(
                    settlement_id=settlement.id,
                    detail_id=detail.id,
                    expense_id=settlement.expense_id,
                    creditor_id=detail.creditor_id,
                    creditor_name=names(detail.creditor_id),
                    amount=detail.amount,
                )
            )
        return sorted(
            pending,
            key=lambda row: (row.settlement_id, row.detail_id),
        )


__all__ = ["GetSettlementSummaryUseCase", "ListPendingTransfersUseCase"]
