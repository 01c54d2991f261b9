"""In-memory port implementations shared by the use-case tests."""

from dataclasses import replace
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

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
from settlement_engine.domain.errors import ConflictError, NotFoundError
from settlement_engine.domain.models.expense import (
    ExpenseItem,
    ExpenseSnapshot,
    UserProfile,
)
from settlement_engine.domain.models.settlement import (
    Settlement,
    SettlementStatus,
)
from settlement_engine.domain.models.vote import CastAction, Vote, VoteOption


NOW = datetime(2026, 3, 1, 12, 0)

PAYER = 1
BOB = 2
CAROL = 3
DAVE = 4
OUTSIDER = 9
GROUP = 1
EXPENSE = 100


class FakeExpenseDirectory(ExpenseDirectoryPort):
    def __init__(self, expenses=()) -> None:
        self.expenses = {expense.id: expense for expense in expenses}

    def get_expense(self, expense_id):
        return self.expenses.get(expense_id)


class FakeMembership(MembershipPort):
    def __init__(self, members=None, owners=None) -> None:
        self.members = members or {}
        self.owners = owners or {}

    def is_member(self, user_id, group_id):
        return user_id in self.members.get(group_id, set())

    def is_owner(self, user_id, group_id):
        return user_id in self.owners.get(group_id, set())


class FakeUserDirectory(UserDirectoryPort):
    def __init__(self, users=()) -> None:
        self.users = {user.id: user for user in users}

    def get_user(self, user_id):
        return self.users.get(user_id)


class FakeSettlementRepository(SettlementRepositoryPort):
    def __init__(self) -> None:
        self.settlements: dict[int, Settlement] = {}
        self._next_settlement_id = 1
        self._next_detail_id = 1
        self.mark_calls: list[int] = []

    def add(self, draft):
        if self.exists_for_expense(draft.expense_id):
            raise ConflictError(
                f"Settlement already exists for expense {draft.expense_id}"
            )
        settlement_id = self._next_settlement_id
        self._next_settlement_id += 1
        details = []
        for detail in draft.details():
            details.append(
                replace(
                    detail,
                    id=self._next_detail_id,
                    settlement_id=settlement_id,
                )
            )
            self._next_detail_id += 1
        settlement = Settlement(
            id=settlement_id,
            expense_id=draft.expense_id,
            method=draft.method,
            status=draft.initial_status,
            deadline=draft.deadline,
            details=tuple(details),
        )
        self.settlements[settlement_id] = settlement
        return settlement

    def get(self, settlement_id):
        return self.settlements.get(settlement_id)

    def get_by_expense(self, expense_id):
        for settlement in self.settlements.values():
            if settlement.expense_id == expense_id:
                return settlement
        return None

    def exists_for_expense(self, expense_id):
        return self.get_by_expense(expense_id) is not None

    def get_detail(self, detail_id):
        for settlement in self.settlements.values():
            detail = settlement.detail(detail_id)
            if detail is not None:
                return detail
        return None

    def mark_detail_sent(self, detail_id):
        self.mark_calls.append(detail_id)
        detail = self.get_detail(detail_id)
        if detail is None:
            raise NotFoundError("SettlementDetail", detail_id)
        settlement = self.settlements[detail.settlement_id]
        details = tuple(
            row.mark_sent() if row.id == detail_id else row
            for row in settlement.details
        )
        updated = replace(settlement, details=details)
        if all(row.sent for row in updated.details):
            updated = replace(updated, status=SettlementStatus.COMPLETED)
        self.settlements[settlement.id] = updated
        return updated

    def delete(self, settlement_id):
        return self.settlements.pop(settlement_id, None) is not None

    def list_unsent_details_for_user(self, user_id):
        rows = []
        for settlement in sorted(self.settlements.values(), key=lambda s: s.id):
            for detail in settlement.details:
                if detail.sent:
                    continue
                if user_id in (detail.debtor_id, detail.creditor_id):
                    rows.append((replace(settlement, details=()), detail))
        return rows


class FakeVoteRepository(VoteRepositoryPort):
    def __init__(self) -> None:
        self.votes: dict[int, Vote] = {}
        self.user_votes: set[tuple[int, int]] = set()
        self._next_vote_id = 1
        self._next_option_id = 1

    def get(self, vote_id):
        return self.votes.get(vote_id)

    def get_by_expense(self, expense_id):
        for vote in self.votes.values():
            if vote.expense_id == expense_id:
                return vote
        return None

    def get_by_option(self, option_id):
        for vote in self.votes.values():
            if vote.option(option_id) is not None:
                return vote
        return None

    def create(self, expense_id, expense_item_ids, close_at):
        existing = self.get_by_expense(expense_id)
        if existing is not None:
            return existing, False
        vote_id = self._next_vote_id
        self._next_vote_id += 1
        options = []
        for item_id in expense_item_ids:
            options.append(VoteOption(self._next_option_id, vote_id, item_id))
            self._next_option_id += 1
        vote = Vote(vote_id, expense_id, False, close_at, tuple(options))
        self.votes[vote_id] = vote
        return vote, True

    def toggle(self, user_id, option_id):
        key = (user_id, option_id)
        if key in self.user_votes:
            self.user_votes.remove(key)
            return CastAction.RETRACTED
        self.user_votes.add(key)
        return CastAction.CAST

    def voters_by_option(self, vote_id):
        vote = self.votes[vote_id]
        return {
            option.id: frozenset(
                user_id
                for user_id, option_id in self.user_votes
                if option_id == option.id
            )
            for option in vote.options
        }

    def delete_open(self, vote_id):
        vote = self.votes.get(vote_id)
        if vote is None or vote.closed:
            return False
        option_ids = {option.id for option in vote.options}
        self.user_votes = {
            key for key in self.user_votes if key[1] not in option_ids
        }
        del self.votes[vote_id]
        return True

    def close(self, vote_id):
        vote = self.votes.get(vote_id)
        if vote is None or vote.closed:
            return False
        self.votes[vote_id] = replace(vote, closed=True)
        return True

    def update_close_at(self, vote_id, close_at):
        vote = replace(self.votes[vote_id], close_at=close_at)
        self.votes[vote_id] = vote
        return vote

    def list_open_expired(self, now):
        return [
            vote
            for vote in self.votes.values()
            if not vote.closed and vote.close_at and vote.close_at <= now
        ]


def _default_expense() -> ExpenseSnapshot:
    return ExpenseSnapshot(
        id=EXPENSE,
        amount=10000,
        payer_id=PAYER,
        group_id=GROUP,
        items=(
            ExpenseItem(id=10, name="Pizza", unit_price=6000, quantity=1),
            ExpenseItem(id=11, name="Wine", unit_price=2000, quantity=2),
        ),
        participant_ids=(PAYER, BOB, CAROL),
        title="Dinner",
    )


@pytest.fixture
def world():
    """Group 1 with payer Alice, Bob and Carol sharing a 10000 dinner.

    Dave is a member who did not take part; user 9 exists outside the group.
    """
    users = FakeUserDirectory(
        [
            UserProfile(PAYER, "Alice"),
            UserProfile(BOB, "Bob"),
            UserProfile(CAROL, "Carol"),
            UserProfile(DAVE, "Dave"),
            UserProfile(OUTSIDER, "Eve"),
        ]
    )
    return SimpleNamespace(
        expenses=FakeExpenseDirectory([_default_expense()]),
        membership=FakeMembership(
            members={GROUP: {PAYER, BOB, CAROL, DAVE}},
            owners={GROUP: {PAYER}},
        ),
        users=users,
        settlements=FakeSettlementRepository(),
        votes=FakeVoteRepository(),
        logger=MagicMock(),
        clock=lambda: NOW,
    )
