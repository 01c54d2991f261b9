"""Lookup and authorization checks shared by use cases."""

from settlement_engine.application.ports.collaborators import (
    ExpenseDirectoryPort,
    MembershipPort,
)
from settlement_engine.domain.errors import AccessDeniedError, NotFoundError
from settlement_engine.domain.models.expense import ExpenseSnapshot


def load_expense(
    expenses: ExpenseDirectoryPort,
    expense_id: int,
) -> ExpenseSnapshot:
    """Return the expense or raise NotFoundError."""
    expense = expenses.get_expense(expense_id)
    if expense is None:
        raise NotFoundError("Expense", expense_id)
    return expense


def require_member(
    membership: MembershipPort,
    user_id: int,
    group_id: int,
) -> None:
    """Raise AccessDeniedError unless the user belongs to the group."""
    if not membership.is_member(user_id, group_id):
        raise AccessDeniedError(
            f"User {user_id} is not a member of group {group_id}"
        )


def require_owner(
    membership: MembershipPort,
    user_id: int,
    group_id: int,
) -> None:
    """Raise AccessDeniedError unless the user owns the group."""
    if not membership.is_owner(user_id, group_id):
        raise AccessDeniedError(
            f"User {user_id} is not the owner of group {group_id}"
        )


__all__ = ["load_expense", "require_member", "require_owner"]
