"""Tables owned by the settlement engine.

Collaborator tables (expenses, groups, users) live elsewhere and are only
read through ``text`` queries; the tables below are created and written by
this package.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.engine import Engine


metadata = MetaData()

settlements_table = Table(
    "settlements",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("expense_id", Integer, nullable=False),
    Column("method", String(16), nullable=False),
    Column("status", String(16), nullable=False),
    Column("deadline", DateTime, nullable=True),
    Column("created_at", DateTime, nullable=False),
    UniqueConstraint("expense_id", name="uq_settlements_expense_id"),
)

settlement_details_table = Table(
    "settlement_details",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "settlement_id",
        Integer,
        ForeignKey("settlements.id"),
        nullable=False,
        index=True,
    ),
    Column("debtor_id", Integer, nullable=False, index=True),
    Column("creditor_id", Integer, nullable=False, index=True),
    Column("amount", Integer, nullable=False),
    Column("sent", Boolean, nullable=False, default=False),
    CheckConstraint("amount > 0", name="ck_settlement_details_amount"),
    CheckConstraint(
        "debtor_id <> creditor_id",
        name="ck_settlement_details_no_self_transfer",
    ),
)

votes_table = Table(
    "votes",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("expense_id", Integer, nullable=False),
    Column("closed", Boolean, nullable=False, default=False),
    Column("close_at", DateTime, nullable=True, index=True),
    Column("created_at", DateTime, nullable=False),
    UniqueConstraint("expense_id", name="uq_votes_expense_id"),
)

vote_options_table = Table(
    "vote_options",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("vote_id", Integer, ForeignKey("votes.id"), nullable=False),
    Column("expense_item_id", Integer, nullable=False),
    UniqueConstraint(
        "vote_id",
        "expense_item_id",
        name="uq_vote_options_vote_item",
    ),
)

user_votes_table = Table(
    "user_votes",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, nullable=False),
    Column(
        "vote_option_id",
        Integer,
        ForeignKey("vote_options.id"),
        nullable=False,
        index=True,
    ),
    UniqueConstraint(
        "user_id",
        "vote_option_id",
        name="uq_user_votes_user_option",
    ),
)


def create_schema(engine: Engine) -> list[str]:
    """Create the owned tables that do not exist yet.

    Args:
        engine: Engine connected to the settlement database.

    Returns:
        list[str]: Names of the owned tables, in creation order.
    """
    metadata.create_all(engine)
    return [table.name for table in metadata.sorted_tables]


__all__ = [
    "metadata",
    "settlements_table",
    "settlement_details_table",
    "votes_table",
    "vote_options_table",
    "user_votes_table",
    "create_schema",
]
