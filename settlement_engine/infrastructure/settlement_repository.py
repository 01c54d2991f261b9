"""SQLAlchemy-backed repository for settlements and their details."""

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.engine import Connection, Row
from sqlalchemy.exc import IntegrityError

from settlement_engine.application.ports.database import DatabaseEnginePort
from settlement_engine.application.ports.settlement_repository import (
    SettlementRepositoryPort,
)
from settlement_engine.domain.errors import ConflictError, NotFoundError
from settlement_engine.domain.models.settlement import (
    Settlement,
    SettlementDetail,
    SettlementDraft,
    SettlementMethod,
    SettlementStatus,
)
from settlement_engine.infrastructure.logging.logger import get_app_logger
from settlement_engine.infrastructure.schema import (
    settlement_details_table as details,
    settlements_table as settlements,
)
from settlement_engine.utils.utils import utcnow


class SqlAlchemySettlementRepository(SettlementRepositoryPort):
    """Repository storing settlements in the owned ``settlements`` tables.

    Every write runs in a single ``engine.begin()`` block so the settlement
    row and its details change together.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the settlement engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def add(self, draft: SettlementDraft) -> Settlement:
        """Insert the settlement and its details in one transaction.

        Raises:
            ConflictError: If the expense already has a settlement.
        """
        engine = self._db_port.get_engine()
        rows = [
            {
                "debtor_id": detail.debtor_id,
                "creditor_id": detail.creditor_id,
                "amount": detail.amount,
                "sent": False,
            }
            for detail in draft.details()
        ]
        try:
            with engine.begin() as conn:
                result = conn.execute(
                    insert(settlements).values(
                        expense_id=draft.expense_id,
                        method=draft.method.value,
                        status=draft.initial_status.value,
                        deadline=draft.deadline,
                        created_at=utcnow(),
                    )
                )
                settlement_id = result.inserted_primary_key[0]
                if rows:
                    conn.execute(
                        insert(details),
                        [
                            {**row, "settlement_id": settlement_id}
                            for row in rows
                        ],
                    )
        except IntegrityError as exc:
            self._logger.warning(
                f"Settlement insert for expense {draft.expense_id} hit a "
                "unique constraint"
            )
            raise ConflictError(
                f"Settlement already exists for expense {draft.expense_id}"
            ) from exc

        with engine.connect() as conn:
            return self._load(conn, settlements.c.id == settlement_id)

    def get(self, settlement_id: int) -> Settlement | None:
        engine = self._db_port.get_engine()
        with engine.connect() as conn:
            return self._load(conn, settlements.c.id == settlement_id)

    def get_by_expense(self, expense_id: int) -> Settlement | None:
        engine = self._db_port.get_engine()
        with engine.connect() as conn:
            return self._load(conn, settlements.c.expense_id == expense_id)

    def exists_for_expense(self, expense_id: int) -> bool:
        query = select(func.count()).select_from(settlements).where(
            settlements.c.expense_id == expense_id
        )
        engine = self._db_port.get_engine()
        with engine.connect() as conn:
            return conn.execute(query).scalar_one() > 0

    def get_detail(self, detail_id: int) -> SettlementDetail | None:
        engine = self._db_port.get_engine()
        with engine.connect() as conn:
            row = conn.execute(
                select(details).where(details.c.id == detail_id)
            ).first()
        return self._to_detail(row) if row else None

    def mark_detail_sent(self, detail_id: int) -> Settlement:
        """Flag the detail and complete the settlement when nothing is left.

        The settlement row is locked with ``SELECT ... FOR UPDATE`` on
        backends that support it, so two debtors confirming their last
        transfers at once cannot both miss the promotion.

        Raises:
            NotFoundError: If the detail does not exist.
        """
        engine = self._db_port.get_engine()
        with engine.begin() as conn:
            row = conn.execute(
                select(details.c.settlement_id).where(
                    details.c.id == detail_id
                )
            ).first()
            if row is None:
                raise NotFoundError("SettlementDetail", detail_id)
            settlement_id = row.settlement_id
            conn.execute(
                select(settlements.c.id)
                .where(settlements.c.id == settlement_id)
                .with_for_update()
            )
            conn.execute(
                update(details)
                .where(details.c.id == detail_id)
                .values(sent=True)
            )
            unsent = conn.execute(
                select(func.count())
                .select_from(details)
                .where(
                    details.c.settlement_id == settlement_id,
                    details.c.sent.is_(False),
                )
            ).scalar_one()
            if unsent == 0:
                conn.execute(
                    update(settlements)
                    .where(
                        settlements.c.id == settlement_id,
                        settlements.c.status
                        == SettlementStatus.PENDING.value,
                    )
                    .values(status=SettlementStatus.COMPLETED.value)
                )
            return self._load(conn, settlements.c.id == settlement_id)

    def delete(self, settlement_id: int) -> bool:
        engine = self._db_port.get_engine()
        with engine.begin() as conn:
            conn.execute(
                delete(details).where(
                    details.c.settlement_id == settlement_id
                )
            )
            result = conn.execute(
                delete(settlements).where(settlements.c.id == settlement_id)
            )
        return result.rowcount > 0

    def list_unsent_details_for_user(
        self,
        user_id: int,
    ) -> list[tuple[Settlement, SettlementDetail]]:
        """Return unsent details involving the user.

        The settlements in the result carry no details of their own; only
        their header fields are loaded.
        """
        query = (
            select(
                details,
                settlements.c.expense_id,
                settlements.c.method,
                settlements.c.status,
                settlements.c.deadline,
            )
            .join(settlements, settlements.c.id == details.c.settlement_id)
            .where(
                details.c.sent.is_(False),
                (details.c.debtor_id == user_id)
                | (details.c.creditor_id == user_id),
            )
            .order_by(details.c.settlement_id, details.c.id)
        )
        engine = self._db_port.get_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return [
            (
                Settlement(
                    id=row.settlement_id,
                    expense_id=row.expense_id,
                    method=SettlementMethod(row.method),
                    status=SettlementStatus(row.status),
                    deadline=row.deadline,
                ),
                self._to_detail(row),
            )
            for row in rows
        ]

    def _load(self, conn: Connection, condition) -> Settlement | None:
        """Read one settlement matching ``condition`` with its details."""
        row = conn.execute(select(settlements).where(condition)).first()
        if row is None:
            return None
        detail_rows = conn.execute(
            select(details)
            .where(details.c.settlement_id == row.id)
            .order_by(details.c.id)
        ).all()
        return Settlement(
            id=row.id,
            expense_id=row.expense_id,
            method=SettlementMethod(row.method),
            status=SettlementStatus(row.status),
            deadline=row.deadline,
            details=tuple(self._to_detail(detail) for detail in detail_rows),
        )

    @staticmethod
    def _to_detail(row: Row) -> SettlementDetail:
        return SettlementDetail(
            id=row.id,
            settlement_id=row.settlement_id,
            debtor_id=row.debtor_id,
            creditor_id=row.creditor_id,
            amount=row.amount,
            sent=bool(row.sent),
        )


__all__ = ["SqlAlchemySettlementRepository"]
