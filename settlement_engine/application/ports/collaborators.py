"""Ports for data owned by other parts of the system.

Expenses, group membership and user profiles are managed elsewhere; the
engine only reads them through these protocols.
"""

from typing import Protocol

from settlement_engine.domain.models.expense import ExpenseSnapshot, UserProfile


class ExpenseDirectoryPort(Protocol):
    """Port exposing read access to expenses."""

    def get_expense(self, expense_id: int) -> ExpenseSnapshot | None:
        """Return the expense, or None when it does not exist."""


class MembershipPort(Protocol):
    """Port answering group membership questions."""

    def is_member(self, user_id: int, group_id: int) -> bool:
        """Return True when the user belongs to the group."""

    def is_owner(self, user_id: int, group_id: int) -> bool:
        """Return True when the user owns the group."""


class UserDirectoryPort(Protocol):
    """Port exposing user display information."""

    def get_user(self, user_id: int) -> UserProfile | None:
        """Return the user, or None when it does not exist."""


__all__ = ["ExpenseDirectoryPort", "MembershipPort", "UserDirectoryPort"]
