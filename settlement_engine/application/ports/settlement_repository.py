"""Port for the settlement aggregate."""

from typing import Protocol

from settlement_engine.domain.models.settlement import (
    Settlement,
    SettlementDetail,
    SettlementDraft,
)


class SettlementRepositoryPort(Protocol):
    """Port owning settlements and their details.

    Each method is one unit of work: multi-row writes either fully apply or
    leave storage untouched.
    """

    def add(self, draft: SettlementDraft) -> Settlement:
        """Persist a settlement with its details.

        Raises:
            ConflictError: If a settlement already exists for the expense.
        """

    def get(self, settlement_id: int) -> Settlement | None:
        """Return the settlement with its details."""

    def get_by_expense(self, expense_id: int) -> Settlement | None:
        """Return the settlement of an expense with its details."""

    def exists_for_expense(self, expense_id: int) -> bool:
        """Return True when the expense already has a settlement."""

    def get_detail(self, detail_id: int) -> SettlementDetail | None:
        """Return a single detail."""

    def mark_detail_sent(self, detail_id: int) -> Settlement:
        """Flag a detail as sent and complete the settlement when all are.

        Both writes happen in the same transaction.
        """

    def delete(self, settlement_id: int) -> bool:
        """Remove a settlement and its details; False when absent."""

    def list_unsent_details_for_user(
        self,
        user_id: int,
    ) -> list[tuple[Settlement, SettlementDetail]]:
        """Return unsent details where the user is debtor or creditor."""


__all__ = ["SettlementRepositoryPort"]
