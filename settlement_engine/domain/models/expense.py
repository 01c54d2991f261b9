"""Read models for data owned by external collaborators."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExpenseItem:
    """One line item of an expense."""

    id: int
    name: str
    unit_price: int
    quantity: int

    @property
    def price(self) -> int:
        """Return the line total in minor currency units."""
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class ExpenseSnapshot:
    """Expense as seen by the settlement engine.

    Attributes:
        id: Expense identifier.
        amount: Total amount in minor currency units.
        payer_id: User who paid and is the creditor of every transfer.
        group_id: Group owning the expense.
        items: Line items, possibly empty.
        participant_ids: Users who took part in the expense.
        title: Optional human-readable label.
    """

    id: int
    amount: int
    payer_id: int
    group_id: int
    items: tuple[ExpenseItem, ...] = ()
    participant_ids: tuple[int, ...] = ()
    title: str = ""

    def item(self, item_id: int) -> ExpenseItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None


@dataclass(frozen=True)
class UserProfile:
    """Display information for a user."""

    id: int
    display_name: str


__all__ = ["ExpenseItem", "ExpenseSnapshot", "UserProfile"]
