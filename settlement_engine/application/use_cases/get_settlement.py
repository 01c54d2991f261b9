"""Use case reading a settlement with its transfers."""

from settlement_engine.application.ports.collaborators import (
    ExpenseDirectoryPort,
    MembershipPort,
    UserDirectoryPort,
)
from settlement_engine.application.ports.settlement_repository import (
    SettlementRepositoryPort,
)
from settlement_engine.application.use_cases.guards import (
    load_expense,
    require_member,
)
from settlement_engine.application.use_cases.views import (
    build_settlement_view,
)
from settlement_engine.domain.errors import NotFoundError
from settlement_engine.domain.models.settlement import Settlement
from settlement_engine.domain.models.views import SettlementView


class GetSettlementUseCase:
    """Return settlements to members of the expense group."""

    def __init__(
        self,
        settlements: SettlementRepositoryPort,
        expenses: ExpenseDirectoryPort,
        membership: MembershipPort,
        users: UserDirectoryPort,
    ) -> None:
        self._settlements = settlements
        self._expenses = expenses
        self._membership = membership
        self._users = users

    def execute(
        self,
        settlement_id: int,
        acting_user_id: int,
    ) -> SettlementView:
        """Return a settlement by id.

        Raises:
            NotFoundError: If the settlement or its expense is absent.
            AccessDeniedError: If the user is not a group member.
        """
        settlement = self._settlements.get(settlement_id)
        if settlement is None:
            raise NotFoundError("Settlement", settlement_id)
        return self._view(settlement, acting_user_id)

    def by_expense(
        self,
        expense_id: int,
        acting_user_id: int,
    ) -> SettlementView:
        """Return the settlement status of an expense.

        Raises:
            NotFoundError: If the expense has no settlement.
            AccessDeniedError: If the user is not a group member.
        """
        expense = load_expense(self._expenses, expense_id)
        require_member(self._membership, acting_user_id, expense.group_id)
        settlement = self._settlements.get_by_expense(expense_id)
        if settlement is None:
            raise NotFoundError("Settlement for expense", expense_id)
        return build_settlement_view(settlement, expense, self._users)

    def _view(
        self,
        settlement: Settlement,
        acting_user_id: int,
    ) -> SettlementView:
        expense = load_expense(self._expenses, settlement.expense_id)
        require_member(self._membership, acting_user_id, expense.group_id)
        return build_settlement_view(settlement, expense, self._users)


__all__ = ["GetSettlementUseCase"]
