"""Use case reporting who voted for what."""

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
from settlement_engine.domain.errors import NotFoundError
from settlement_engine.domain.models.views import OptionTally, VoteStatusView


class GetVoteStatusUseCase:
    """Return per-option voters and the participants yet to vote."""

    def __init__(
        self,
        votes: VoteRepositoryPort,
        expenses: ExpenseDirectoryPort,
        membership: MembershipPort,
    ) -> None:
        self._votes = votes
        self._expenses = expenses
        self._membership = membership

    def execute(
        self,
        expense_id: int,
        acting_user_id: int | None = None,
    ) -> VoteStatusView:
        """Return the current tally of the expense vote.

        Raises:
            NotFoundError: If the expense or its vote is absent.
            AccessDeniedError: If ``acting_user_id`` is given and is not a
                group member.
        """
        expense = load_expense(self._expenses, expense_id)
        if acting_user_id is not None:
            require_member(
                self._membership,
                acting_user_id,
                expense.group_id,
            )
        vote = self._votes.get_by_expense(expense_id)
        if vote is None:
            raise NotFoundError("Vote for expense", expense_id)

        voters = self._votes.voters_by_option(vote.id)
        voted: set[int] = set()
        per_option = []
        for option in vote.options:
            option_voters = voters.get(option.id, frozenset())
            voted.update(option_voters)
            item = expense.item(option.expense_item_id)
            per_option.append(
                OptionTally(
                    option_id=option.id,
                    item_name=item.name if item else "",
                    price=item.price if item else 0,
                    voter_ids=sorted(option_voters),
                )
            )
        return VoteStatusView(
            vote_id=vote.id,
            expense_id=expense_id,
            closed=vote.closed,
            close_at=vote.close_at,
            per_option=per_option,
            non_voter_ids=[
                participant
                for participant in expense.participant_ids
                if participant not in voted
            ],
        )


__all__ = ["GetVoteStatusUseCase"]
