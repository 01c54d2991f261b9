"""Use case turning an expense and an allocation into a settlement.

The allocation request is one of four variants (EQUAL, DIRECT, PERCENT,
ITEM). Each variant is validated, converted to per-debtor shares and then
persisted as one settlement row plus one detail row per positive share, all
pointing at the expense payer as creditor.
"""

from collections.abc import Sequence
from datetime import datetime

from settlement_engine.application.ports.collaborators import (
    ExpenseDirectoryPort,
    MembershipPort,
    UserDirectoryPort,
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
from settlement_engine.application.use_cases.views import (
    DisplayNames,
    build_settlement_view,
)
from settlement_engine.domain.errors import ConflictError, ValidationError
from settlement_engine.domain.models.allocation import (
    Allocation,
    DirectAllocation,
    EqualAllocation,
    ItemAllocation,
    PercentAllocation,
)
from settlement_engine.domain.models.expense import ExpenseSnapshot
from settlement_engine.domain.models.settlement import Share, SettlementDraft
from settlement_engine.domain.models.views import SettlementView
from settlement_engine.domain.models.vote import ItemTally
from settlement_engine.domain.services.allocation import (
    allocate_direct,
    allocate_equal,
    allocate_percent,
)
from settlement_engine.domain.services.item_netting import net_item_shares
from settlement_engine.domain.services.validation import (
    validate_direct_entries,
    validate_percent_entries,
    validate_unique_users,
)
from settlement_engine.infrastructure.logging.logger import get_app_logger
from settlement_engine.utils.utils import to_naive_utc


class CreateSettlementUseCase:
    """Create the settlement of an expense."""

    def __init__(
        self,
        settlements: SettlementRepositoryPort,
        votes: VoteRepositoryPort,
        expenses: ExpenseDirectoryPort,
        membership: MembershipPort,
        users: UserDirectoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            settlements: Repository persisting the settlement aggregate.
            votes: Repository read for ITEM allocations.
            expenses: Source of expense snapshots.
            membership: Group membership checks.
            users: User lookups for validation and display names.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._settlements = settlements
        self._votes = votes
        self._expenses = expenses
        self._membership = membership
        self._users = users
        self._logger = logger or get_app_logger()

    def execute(
        self,
        expense_id: int,
        allocation: Allocation,
        acting_user_id: int,
        deadline: datetime | None = None,
    ) -> SettlementView:
        """Validate the allocation and persist the resulting transfers.

        Args:
            expense_id: Expense being settled.
            allocation: Allocation variant and its inputs.
            acting_user_id: User requesting the settlement.
            deadline: Optional date by which transfers should be made.

        Returns:
            SettlementView: Stored settlement with display names.

        Raises:
            NotFoundError: If the expense does not exist, or the payer
                or a debtor is unknown to the user directory.
            AccessDeniedError: If the acting user is not a group member.
            ConflictError: If the expense is already settled or its vote is
                still open.
            ValidationError: If the allocation inputs are invalid.
        """
        expense = load_expense(self._expenses, expense_id)
        require_member(self._membership, acting_user_id, expense.group_id)
        if self._settlements.exists_for_expense(expense_id):
            raise ConflictError(
                f"Settlement already exists for expense {expense_id}"
            )

        shares = self._compute_shares(expense, allocation)
        positive = tuple(share for share in shares if share.amount > 0)
        dropped = len(shares) - len(positive)
        if dropped:
            self._logger.info(
                f"Dropped {dropped} zero-amount shares for expense "
                f"{expense_id}"
            )

        names = DisplayNames(self._users)
        for user_id in (expense.payer_id, *(s.debtor_id for s in positive)):
            names(user_id)

        draft = SettlementDraft(
            expense_id=expense_id,
            method=allocation.method,
            creditor_id=expense.payer_id,
            shares=positive,
            deadline=to_naive_utc(deadline) if deadline else None,
        )
        settlement = self._settlements.add(draft)
        self._logger.info(
            f"Created {settlement.method.value} settlement "
            f"{settlement.id} for expense {expense_id} with "
            f"{len(settlement.details)} transfers"
        )
        return build_settlement_view(settlement, expense, self._users, names)

    def _compute_shares(
        self,
        expense: ExpenseSnapshot,
        allocation: Allocation,
    ) -> list[Share]:
        match allocation:
            case EqualAllocation(participant_ids=None):
                participant_ids = list(expense.participant_ids)
                self._validate_users(expense, participant_ids, "participants")
                return allocate_equal(
                    expense.amount,
                    expense.payer_id,
                    participant_ids,
                )
            case EqualAllocation(participant_ids=participant_ids):
                self._validate_users(expense, participant_ids, "participants")
                return allocate_equal(
                    expense.amount,
                    expense.payer_id,
                    list(participant_ids),
                )
            case DirectAllocation(entries=entries):
                shares = allocate_direct(expense.payer_id, entries)
                self._validate_users(
                    expense,
                    [entry.user_id for entry in entries],
                    "direct entries",
                )
                validate_direct_entries(entries, expense.amount)
                return shares
            case PercentAllocation(entries=entries):
                self._validate_users(
                    expense,
                    [entry.user_id for entry in entries],
                    "percent entries",
                )
                validate_percent_entries(entries)
                return allocate_percent(
                    expense.amount,
                    expense.payer_id,
                    entries,
                )
            case ItemAllocation():
                return self._item_shares(expense)
            case _:
                raise ValidationError(
                    f"Unsupported allocation: {allocation!r}"
                )

    def _validate_users(
        self,
        expense: ExpenseSnapshot,
        user_ids: Sequence[int],
        label: str,
    ) -> None:
        """Check users are unique, exist and belong to the expense group."""
        validate_unique_users(user_ids, label)
        for user_id in user_ids:
            if self._users.get_user(user_id) is None:
                raise ValidationError(f"User {user_id} does not exist")
            if not self._membership.is_member(user_id, expense.group_id):
                raise ValidationError(
                    f"User {user_id} is not a member of group "
                    f"{expense.group_id}"
                )

    def _item_shares(self, expense: ExpenseSnapshot) -> list[Share]:
        """Compute netted shares from the closed vote of the expense."""
        vote = self._votes.get_by_expense(expense.id)
        if vote is None:
            raise ValidationError(
                f"No vote exists for expense {expense.id}; create one first"
            )
        if not vote.closed:
            raise ConflictError(
                f"Vote {vote.id} for expense {expense.id} is still open"
            )

        voters = self._votes.voters_by_option(vote.id)
        tallies = []
        for option in vote.options:
            item = expense.item(option.expense_item_id)
            if item is None:
                raise ValidationError(
                    f"Expense item {option.expense_item_id} of option "
                    f"{option.id} does not exist"
                )
            tallies.append(
                ItemTally(
                    option_id=option.id,
                    price=item.price,
                    voter_ids=voters.get(option.id, frozenset()),
                )
            )

        shares, skipped = net_item_shares(expense.payer_id, tallies)
        if skipped:
            self._logger.info(
                f"Options {skipped} of vote {vote.id} had no voters; "
                "their cost stays with the payer"
            )
        return shares


__all__ = ["CreateSettlementUseCase"]
