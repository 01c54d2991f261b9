"""Vote aggregate: item-selection vote attached to one expense."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class CastAction(str, Enum):
    """Outcome of a toggle cast."""

    CAST = "cast"
    RETRACTED = "retracted"


@dataclass(frozen=True)
class VoteOption:
    """One selectable expense line item."""

    id: int
    vote_id: int
    expense_item_id: int


@dataclass(frozen=True)
class Vote:
    """Vote on which participant consumed which item.

    Attributes:
        id: Vote identifier.
        expense_id: Expense the vote belongs to (one vote per expense).
        closed: Whether casting is no longer allowed.
        close_at: Deadline after which the scheduled job closes the vote.
        options: One option per expense line item.
    """

    id: int
    expense_id: int
    closed: bool = False
    close_at: datetime | None = None
    options: tuple[VoteOption, ...] = field(default_factory=tuple)

    def option(self, option_id: int) -> VoteOption | None:
        for option in self.options:
            if option.id == option_id:
                return option
        return None


@dataclass(frozen=True)
class ItemTally:
    """Priced option and the users who claimed it."""

    option_id: int
    price: int
    voter_ids: frozenset[int]


__all__ = ["CastAction", "VoteOption", "Vote", "ItemTally"]
