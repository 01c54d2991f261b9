"""Read adapters for expense, membership and user data.

These tables belong to the surrounding application. The settlement engine
never writes them and only relies on the columns selected below.
"""

from sqlalchemy import text

from settlement_engine.application.ports.collaborators import (
    ExpenseDirectoryPort,
    MembershipPort,
    UserDirectoryPort,
)
from settlement_engine.application.ports.database import DatabaseEnginePort
from settlement_engine.domain.models.expense import (
    ExpenseItem,
    ExpenseSnapshot,
    UserProfile,
)


OWNER_ROLE = "OWNER"

SELECT_EXPENSE_SQL = text(
    """
    SELECT id, amount, payer_id, group_id, title
    FROM expenses
    WHERE id = :expense_id
    """
)

SELECT_EXPENSE_ITEMS_SQL = text(
    """
    SELECT id, name, unit_price, quantity
    FROM expense_items
    WHERE expense_id = :expense_id
    ORDER BY id
    """
)

SELECT_EXPENSE_PARTICIPANTS_SQL = text(
    """
    SELECT user_id
    FROM expense_participants
    WHERE expense_id = :expense_id
    ORDER BY user_id
    """
)

SELECT_MEMBER_ROLE_SQL = text(
    """
    SELECT role
    FROM group_members
    WHERE user_id = :user_id AND group_id = :group_id
    """
)

SELECT_USER_SQL = text(
    """
    SELECT id, display_name
    FROM users
    WHERE id = :user_id
    """
)


class SqlAlchemyExpenseDirectory(ExpenseDirectoryPort):
    """Expense snapshots assembled from the expense tables."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the directory.

        Args:
            db_port: Port providing access to the database holding expenses.
        """
        self._db_port = db_port

    def get_expense(self, expense_id: int) -> ExpenseSnapshot | None:
        params = {"expense_id": expense_id}
        engine = self._db_port.get_engine()
        with engine.connect() as conn:
            expense = conn.execute(SELECT_EXPENSE_SQL, params).first()
            if expense is None:
                return None
            items = conn.execute(SELECT_EXPENSE_ITEMS_SQL, params).all()
            participants = conn.execute(
                SELECT_EXPENSE_PARTICIPANTS_SQL,
                params,
            ).all()
        return ExpenseSnapshot(
            id=expense.id,
            amount=int(expense.amount),
            payer_id=expense.payer_id,
            group_id=expense.group_id,
            items=tuple(
                ExpenseItem(
                    id=item.id,
                    name=item.name,
                    unit_price=int(item.unit_price),
                    quantity=int(item.quantity),
                )
                for item in items
            ),
            participant_ids=tuple(row.user_id for row in participants),
            title=expense.title or "",
        )


class SqlAlchemyMembershipDirectory(MembershipPort):
    """Group membership backed by the ``group_members`` table."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._db_port = db_port

    def is_member(self, user_id: int, group_id: int) -> bool:
        return self._fetch_role(user_id, group_id) is not None

    def is_owner(self, user_id: int, group_id: int) -> bool:
        role = self._fetch_role(user_id, group_id)
        return role is not None and role.upper() == OWNER_ROLE

    def _fetch_role(self, user_id: int, group_id: int) -> str | None:
        engine = self._db_port.get_engine()
        with engine.connect() as conn:
            row = conn.execute(
                SELECT_MEMBER_ROLE_SQL,
                {"user_id": user_id, "group_id": group_id},
            ).first()
        if row is None:
            return None
        return row.role or ""


class SqlAlchemyUserDirectory(UserDirectoryPort):
    """User profiles backed by the ``users`` table."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._db_port = db_port

    def get_user(self, user_id: int) -> UserProfile | None:
        engine = self._db_port.get_engine()
        with engine.connect() as conn:
            row = conn.execute(SELECT_USER_SQL, {"user_id": user_id}).first()
        if row is None:
            return None
        return UserProfile(id=row.id, display_name=row.display_name)


__all__ = [
    "OWNER_ROLE",
    "SqlAlchemyExpenseDirectory",
    "SqlAlchemyMembershipDirectory",
    "SqlAlchemyUserDirectory",
]
