"""Use case removing a settlement and its transfers."""

from settlement_engine.application.ports.collaborators import (
    ExpenseDirectoryPort,
    MembershipPort,
)
from settlement_engine.application.ports.settlement_repository import (
    SettlementRepositoryPort,
)
from settlement_engine.application.use_cases.guards import (
    load_expense,
    require_member,
)
from settlement_engine.domain.errors import AccessDeniedError, NotFoundError
from settlement_engine.infrastructure.logging.logger import get_app_logger


class DeleteSettlementUseCase:
    """Delete a settlement on behalf of the expense payer.

    Any vote of the expense is left as it is.
    """

    def __init__(
        self,
        settlements: SettlementRepositoryPort,
        expenses: ExpenseDirectoryPort,
        membership: MembershipPort,
        logger=None,
    ) -> None:
        self._settlements = settlements
        self._expenses = expenses
        self._membership = membership
        self._logger = logger or get_app_logger()

    def execute(self, settlement_id: int, acting_user_id: int) -> None:
        """Delete the settlement.

        Raises:
            NotFoundError: If the settlement is absent.
            AccessDeniedError: If the user is not a member or not the payer.
        """
        settlement = self._settlements.get(settlement_id)
        if settlement is None:
            raise NotFoundError("Settlement", settlement_id)
        expense = load_expense(self._expenses, settlement.expense_id)
        require_member(self._membership, acting_user_id, expense.group_id)
        if expense.payer_id != acting_user_id:
            raise AccessDeniedError(
                f"Only the payer of expense {expense.id} may delete "
                f"settlement {settlement_id}"
            )
        if not self._settlements.delete(settlement_id):
            raise NotFoundError("Settlement", settlement_id)
        self._logger.info(
            f"Deleted settlement {settlement_id} of expense {expense.id}"
        )


__all__ = ["DeleteSettlementUseCase"]
