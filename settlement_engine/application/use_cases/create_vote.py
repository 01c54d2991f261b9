"""Use case opening the item vote of an expense."""

from collections.abc import Callable
from datetime import datetime, timedelta

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
    require_member,
)
from settlement_engine.domain.constants import DEFAULT_VOTE_DURATION_HOURS
from settlement_engine.domain.errors import ConflictError, ValidationError
from settlement_engine.domain.models.expense import ExpenseSnapshot
from settlement_engine.domain.models.views import VoteOptionView, VoteView
from settlement_engine.domain.models.vote import Vote
from settlement_engine.domain.policies.vote_policy import (
    ensure_future_deadline,
)
from settlement_engine.infrastructure.logging.logger import get_app_logger
from settlement_engine.utils.utils import to_naive_utc, utcnow


def build_vote_view(vote: Vote, expense: ExpenseSnapshot) -> VoteView:
    """Return the vote with item names and prices for each option."""
    options = []
    for option in vote.options:
        item = expense.item(option.expense_item_id)
        options.append(
            VoteOptionView(
                option_id=option.id,
                item_name=item.name if item else "",
                price=item.price if item else 0,
            )
        )
    return VoteView(
        vote_id=vote.id,
        expense_id=vote.expense_id,
        closed=vote.closed,
        close_at=vote.close_at,
        options=options,
    )


class CreateVoteUseCase:
    """Create the vote of an expense, or return the one already there."""

    def __init__(
        self,
        votes: VoteRepositoryPort,
        settlements: SettlementRepositoryPort,
        expenses: ExpenseDirectoryPort,
        membership: MembershipPort,
        default_duration_hours: int = DEFAULT_VOTE_DURATION_HOURS,
        clock: Callable[[], datetime] = utcnow,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            votes: Repository owning votes and options.
            settlements: Repository checked for an existing settlement.
            expenses: Source of expense snapshots.
            membership: Group membership checks.
            default_duration_hours: Vote lifetime when no deadline is given.
            clock: Returns the current naive UTC time.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._votes = votes
        self._settlements = settlements
        self._expenses = expenses
        self._membership = membership
        self._default_duration = timedelta(hours=default_duration_hours)
        self._clock = clock
        self._logger = logger or get_app_logger()

    def execute(
        self,
        expense_id: int,
        acting_user_id: int,
        close_at: datetime | None = None,
    ) -> VoteView:
        """Open a vote with one option per expense line item.

        Args:
            expense_id: Expense to vote on.
            acting_user_id: User opening the vote.
            close_at: Deadline; defaults to now plus the configured duration.

        Returns:
            VoteView: The new or pre-existing vote.

        Raises:
            NotFoundError: If the expense does not exist.
            AccessDeniedError: If the user is not a group member.
            ConflictError: If the expense is already settled.
            ValidationError: If the expense has no items or the deadline is
                not in the future.
        """
        expense = load_expense(self._expenses, expense_id)
        require_member(self._membership, acting_user_id, expense.group_id)
        if self._settlements.exists_for_expense(expense_id):
            raise ConflictError(
                f"Expense {expense_id} is already settled; cannot open a vote"
            )

        existing = self._votes.get_by_expense(expense_id)
        if existing is not None:
            return build_vote_view(existing, expense)

        if not expense.items:
            raise ValidationError(f"Expense {expense_id} has no line items")

        now = self._clock()
        if close_at is None:
            close_at = now + self._default_duration
        else:
            close_at = to_naive_utc(close_at)
            ensure_future_deadline(close_at, now)

        vote, created = self._votes.create(
            expense_id,
            [item.id for item in expense.items],
            close_at,
        )
        if created:
            self._logger.info(
                f"Created vote {vote.id} for expense {expense_id} with "
                f"{len(vote.options)} options, closing at {close_at}"
            )
        return build_vote_view(vote, expense)


__all__ = ["CreateVoteUseCase", "build_vote_view"]
