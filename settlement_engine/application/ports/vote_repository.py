"""Port for the vote aggregate."""

from datetime import datetime
from typing import Protocol

from settlement_engine.domain.models.vote import CastAction, Vote


class VoteRepositoryPort(Protocol):
    """Port owning votes, their options and user votes."""

    def get(self, vote_id: int) -> Vote | None:
        """Return the vote with its options."""

    def get_by_expense(self, expense_id: int) -> Vote | None:
        """Return the vote of an expense with its options."""

    def get_by_option(self, option_id: int) -> Vote | None:
        """Return the vote owning an option."""

    def create(
        self,
        expense_id: int,
        expense_item_ids: list[int],
        close_at: datetime | None,
    ) -> tuple[Vote, bool]:
        """Create a vote with one option per item, or return the existing one.

        Returns:
            tuple[Vote, bool]: The vote and whether it was created now.
        """

    def toggle(self, user_id: int, option_id: int) -> CastAction:
        """Cast the user's vote on an option, or retract it if present."""

    def voters_by_option(self, vote_id: int) -> dict[int, frozenset[int]]:
        """Return voter ids for every option of the vote."""

    def delete_open(self, vote_id: int) -> bool:
        """Delete the vote and its children unless it is closed.

        Returns:
            bool: False when the vote was closed and nothing was deleted.
        """

    def close(self, vote_id: int) -> bool:
        """Close an open vote; False when it was already closed."""

    def update_close_at(self, vote_id: int, close_at: datetime) -> Vote:
        """Move the deadline of a vote."""

    def list_open_expired(self, now: datetime) -> list[Vote]:
        """Return open votes whose deadline is at or before ``now``."""


__all__ = ["VoteRepositoryPort"]
