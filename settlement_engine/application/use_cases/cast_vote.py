"""Use case toggling a user's selection of one vote option."""

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
from settlement_engine.domain.errors import (
    AccessDeniedError,
    ConflictError,
    NotFoundError,
)
from settlement_engine.domain.models.expense import ExpenseSnapshot
from settlement_engine.domain.models.views import CastVoteResult
from settlement_engine.domain.models.vote import CastAction
from settlement_engine.infrastructure.logging.logger import get_app_logger


class CastVoteUseCase:
    """Cast or retract a vote on an option.

    A second cast on the same option by the same user retracts the first.
    """

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

    def execute(self, option_id: int, user_id: int) -> CastVoteResult:
        """Toggle the user's vote on the option.

        Args:
            option_id: Option being selected.
            user_id: Voting user.

        Returns:
            CastVoteResult: Whether the vote was cast or retracted, the item
            name, and whether every participant has now voted.

        Raises:
            NotFoundError: If the option does not exist.
            ConflictError: If the vote is closed.
            AccessDeniedError: If the user is not a group member or not an
                expense participant.
        """
        vote = self._votes.get_by_option(option_id)
        if vote is None:
            raise NotFoundError("VoteOption", option_id)
        if vote.closed:
            raise ConflictError(f"Vote {vote.id} is closed")

        expense = load_expense(self._expenses, vote.expense_id)
        require_member(self._membership, user_id, expense.group_id)
        if user_id not in expense.participant_ids:
            raise AccessDeniedError(
                f"User {user_id} is not a participant of expense {expense.id}"
            )

        action = self._votes.toggle(user_id, option_id)
        option = vote.option(option_id)
        item = expense.item(option.expense_item_id) if option else None
        item_name = item.name if item else ""
        verb = "cast" if action is CastAction.CAST else "retracted"
        self._logger.info(
            f"User {user_id} {verb} vote on option {option_id} "
            f"({item_name}) of vote {vote.id}"
        )

        all_voted = self._all_participants_voted(vote.id, expense)
        if all_voted and action is CastAction.CAST:
            self._logger.info(
                f"All participants of expense {expense.id} have voted; "
                f"payer {expense.payer_id} can settle"
            )
        return CastVoteResult(
            action=action,
            item_name=item_name,
            all_participants_voted=all_voted,
        )

    def _all_participants_voted(
        self,
        vote_id: int,
        expense: ExpenseSnapshot,
    ) -> bool:
        voted: set[int] = set()
        for voter_ids in self._votes.voters_by_option(vote_id).values():
            voted.update(voter_ids)
        return bool(expense.participant_ids) and all(
            participant in voted for participant in expense.participant_ids
        )


__all__ = ["CastVoteUseCase"]
