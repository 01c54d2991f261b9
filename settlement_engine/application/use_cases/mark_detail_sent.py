"""Use case confirming that a debtor sent one transfer.

Confirming the last unsent transfer of a settlement completes it. The
repository applies the flag and the promotion in one transaction, so a
settlement is COMPLETED exactly when all of its transfers are sent.
"""

from settlement_engine.application.ports.collaborators import (
    UserDirectoryPort,
)
from settlement_engine.application.ports.settlement_repository import (
    SettlementRepositoryPort,
)
from settlement_engine.application.use_cases.views import (
    DisplayNames,
    build_transfer_view,
)
from settlement_engine.domain.errors import AccessDeniedError, NotFoundError
from settlement_engine.domain.models.views import MarkSentResult
from settlement_engine.infrastructure.logging.logger import get_app_logger


class MarkDetailSentUseCase:
    """Mark a transfer as sent on behalf of its debtor."""

    def __init__(
        self,
        settlements: SettlementRepositoryPort,
        users: UserDirectoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            settlements: Repository owning settlement details.
            users: User lookups for display names.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._settlements = settlements
        self._users = users
        self._logger = logger or get_app_logger()

    def execute(self, detail_id: int, acting_user_id: int) -> MarkSentResult:
        """Flag the transfer as sent.

        Args:
            detail_id: Transfer to confirm.
            acting_user_id: Must be the debtor of the transfer.

        Returns:
            MarkSentResult: Updated transfer and settlement status.

        Raises:
            NotFoundError: If the transfer does not exist.
            AccessDeniedError: If the acting user is not the debtor.
        """
        detail = self._settlements.get_detail(detail_id)
        if detail is None:
            raise NotFoundError("SettlementDetail", detail_id)
        if detail.debtor_id != acting_user_id:
            raise AccessDeniedError(
                f"User {acting_user_id} is not the debtor of settlement "
                f"detail {detail_id}"
            )

        names = DisplayNames(self._users)
        if detail.sent:
            settlement = self._settlements.get(detail.settlement_id)
            if settlement is None:
                raise NotFoundError("Settlement", detail.settlement_id)
            self._logger.warning(
                f"Settlement detail {detail_id} was already marked as sent"
            )
            return MarkSentResult(
                detail=build_transfer_view(detail, names),
                settlement_status=settlement.status,
                already_sent=True,
            )

        settlement = self._settlements.mark_detail_sent(detail_id)
        updated = settlement.detail(detail_id) or detail.mark_sent()
        self._logger.info(
            f"User {acting_user_id} marked settlement detail {detail_id} "
            "as sent"
        )
        if settlement.is_completed:
            self._logger.info(f"Settlement {settlement.id} completed")
        return MarkSentResult(
            detail=build_transfer_view(updated, names),
            settlement_status=settlement.status,
        )

    def confirm_transfer(
        self,
        settlement_id: int,
        acting_user_id: int,
        creditor_id: int,
    ) -> MarkSentResult:
        """Mark the acting user's transfer to ``creditor_id`` as sent.

        Raises:
            NotFoundError: If the settlement or the transfer is absent.
        """
        settlement = self._settlements.get(settlement_id)
        if settlement is None:
            raise NotFoundError("Settlement", settlement_id)
        detail = settlement.detail_for_pair(acting_user_id, creditor_id)
        if detail is None:
            raise NotFoundError(
                "SettlementDetail",
                f"{acting_user_id}->{creditor_id} in settlement "
                f"{settlement_id}",
            )
        return self.execute(detail.id, acting_user_id)


__all__ = ["MarkDetailSentUseCase"]
