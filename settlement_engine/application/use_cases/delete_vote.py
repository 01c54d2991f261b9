"""Use case deleting an open vote with its options and user votes."""

from settlement_engine.application.ports.collaborators import (
    ExpenseDirectoryPort,
    MembershipPort,
)
from settlement_engine.application.ports.vote_repository import (
    VoteRepositoryPort,
)
from settlement_engine.application.use_cases.guards import (
    load_expense,
    require_member,
)
from settlement_engine.domain.errors import ConflictError, NotFoundError
from settlement_engine.infrastructure.logging.logger import get_app_logger


class DeleteVoteUseCase:
    """Delete the vote of an expense while it is still open."""

    def __init__(
        self,
        votes: VoteRepositoryPort,
        expenses: ExpenseDirectoryPort,
        membership: MembershipPort,
        logger=None,
    ) -> None:
        self._votes = votes
        self._expenses = expenses
        self._membership = membership
        self._logger = logger or get_app_logger()

    def execute(
        self,
        expense_id: int,
        acting_user_id: int | None = None,
    ) -> None:
        """Delete the vote.

        Raises:
            NotFoundError: If the vote is absent.
            ConflictError: If the vote is closed.
            AccessDeniedError: If ``acting_user_id`` is given and is not a
                group member.
        """
        if acting_user_id is not None:
            expense = load_expense(self._expenses, expense_id)
            require_member(
                self._membership,
                acting_user_id,
                expense.group_id,
            )
        vote = self._votes.get_by_expense(expense_id)
        if vote is None:
            raise NotFoundError("Vote for expense", expense_id)
        if vote.closed or not self._votes.delete_open(vote.id):
            raise ConflictError(f"Vote {vote.id} is closed")
        self._logger.info(f"Deleted vote {vote.id} of expense {expense_id}")


__all__ = ["DeleteVoteUseCase"]
