"""Use cases controlling when a vote stops accepting casts."""

from collections.abc import Callable
from datetime import datetime

from settlement_engine.application.ports.collaborators import (
    ExpenseDirectoryPort,
    MembershipPort,
)
from settlement_engine.application.ports.settlement_repository import (
    SettlementRepositoryPort,
)
from settlement_engine.application.ports.vote_repository import (
    VoteRepositoryPort,
)
from settlement_engine.application.use_cases.guards import (
    load_expense,
    require_owner,
)
from settlement_engine.domain.errors import ConflictError, NotFoundError
from settlement_engine.domain.models.vote import Vote
from settlement_engine.domain.policies.vote_policy import (
    ensure_future_deadline,
    is_vote_expired,
)
from settlement_engine.infrastructure.logging.logger import get_app_logger
from settlement_engine.utils.utils import to_naive_utc, utcnow


class CloseVoteUseCase:
    """Close a vote early on behalf of the group owner."""

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

    def execute(self, expense_id: int, acting_user_id: int) -> Vote:
        """Close the vote of the expense.

        Raises:
            NotFoundError: If the expense or its vote is absent.
            AccessDeniedError: If the user does not own the group.
            ConflictError: If the vote is already closed.
        """
        expense = load_expense(self._expenses, expense_id)
        require_owner(self._membership, acting_user_id, expense.group_id)
        vote = self._votes.get_by_expense(expense_id)
        if vote is None:
            raise NotFoundError("Vote for expense", expense_id)
        if vote.closed or not self._votes.close(vote.id):
            raise ConflictError(f"Vote {vote.id} is already closed")
        self._logger.info(
            f"User {acting_user_id} closed vote {vote.id} of expense "
            f"{expense_id}"
        )
        return self._votes.get(vote.id)


class ExtendVoteUseCase:
    """Move the deadline of an open vote."""

    def __init__(
        self,
        votes: VoteRepositoryPort,
        settlements: SettlementRepositoryPort,
        expenses: ExpenseDirectoryPort,
        membership: MembershipPort,
        clock: Callable[[], datetime] = utcnow,
        logger=None,
    ) -> None:
        self._votes = votes
        self._settlements = settlements
        self._expenses = expenses
        self._membership = membership
        self._clock = clock
        self._logger = logger or get_app_logger()

    def execute(
        self,
        expense_id: int,
        new_close_at: datetime,
        acting_user_id: int,
    ) -> Vote:
        """Set a later deadline on the vote.

        Args:
            expense_id: Expense whose vote is extended.
            new_close_at: New deadline, which must lie in the future.
            acting_user_id: Must own the expense group.

        Returns:
            Vote: The vote with its new deadline.

        Raises:
            NotFoundError: If the expense or its vote is absent.
            AccessDeniedError: If the user does not own the group.
            ConflictError: If the vote is closed or the expense is settled.
            ValidationError: If the new deadline is not in the future.
        """
        expense = load_expense(self._expenses, expense_id)
        require_owner(self._membership, acting_user_id, expense.group_id)
        vote = self._votes.get_by_expense(expense_id)
        if vote is None:
            raise NotFoundError("Vote for expense", expense_id)
        if vote.closed:
            raise ConflictError(f"Vote {vote.id} is already closed")
        if self._settlements.exists_for_expense(expense_id):
            raise ConflictError(f"Expense {expense_id} is already settled")

        close_at = to_naive_utc(new_close_at)
        ensure_future_deadline(close_at, self._clock())
        updated = self._votes.update_close_at(vote.id, close_at)
        self._logger.info(f"Extended vote {vote.id} until {close_at}")
        return updated


class CloseExpiredVotesUseCase:
    """Close every open vote whose deadline has passed.

    Intended to be triggered by an external scheduler.
    """

    def __init__(self, votes: VoteRepositoryPort, logger=None) -> None:
        self._votes = votes
        self._logger = logger or get_app_logger()

    def run(self, now: datetime | None = None) -> list[int]:
        """Close expired votes.

        Args:
            now: Reference time; defaults to the current UTC time.

        Returns:
            list[int]: Ids of the votes closed by this run.
        """
        reference = to_naive_utc(now) if now else utcnow()
        closed_ids = []
        for vote in self._votes.list_open_expired(reference):
            if not is_vote_expired(vote, reference):
                continue
            if self._votes.close(vote.id):
                closed_ids.append(vote.id)
        self._logger.info(
            f"Closed {len(closed_ids)} expired votes as of {reference}"
        )
        return closed_ids


__all__ = ["CloseVoteUseCase", "ExtendVoteUseCase", "CloseExpiredVotesUseCase"]
