"""Composition root for wiring infrastructure adapters."""

from settlement_engine.application.ports.collaborators import (
    ExpenseDirectoryPort,
    MembershipPort,
    UserDirectoryPort,
)
from settlement_engine.application.ports.database import DatabaseEnginePort
from settlement_engine.application.ports.settlement_repository import (
    SettlementRepositoryPort,
)
from settlement_engine.application.ports.vote_repository import (
    VoteRepositoryPort,
)
from settlement_engine.application.use_cases import (
    CastVoteUseCase,
    CloseExpiredVotesUseCase,
    CloseVoteUseCase,
    CreateSettlementUseCase,
    CreateVoteUseCase,
    DeleteSettlementUseCase,
    DeleteVoteUseCase,
    ExtendVoteUseCase,
    GetSettlementSummaryUseCase,
    GetSettlementUseCase,
    GetVoteStatusUseCase,
    ListPendingTransfersUseCase,
    MarkDetailSentUseCase,
)
from settlement_engine.infrastructure.collaborators import (
    SqlAlchemyExpenseDirectory,
    SqlAlchemyMembershipDirectory,
    SqlAlchemyUserDirectory,
)
from settlement_engine.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from settlement_engine.infrastructure.logging.logger import get_app_logger
from settlement_engine.infrastructure.settings import EngineSettings
from settlement_engine.infrastructure.settlement_repository import (
    SqlAlchemySettlementRepository,
)
from settlement_engine.infrastructure.vote_repository import (
    SqlAlchemyVoteRepository,
)


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_settlement_repository(
    db_port: DatabaseEnginePort | None = None,
) -> SettlementRepositoryPort:
    """Return the settlement repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemySettlementRepository(resolved_db, logger=get_app_logger())


def build_vote_repository(
    db_port: DatabaseEnginePort | None = None,
    settings: EngineSettings | None = None,
) -> VoteRepositoryPort:
    """Return the vote repository configured with the cast retry budget."""
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or EngineSettings.from_env()
    return SqlAlchemyVoteRepository(
        resolved_db,
        cast_retries=resolved_settings.vote_cast_retries,
        logger=get_app_logger(),
    )


def build_expense_directory(
    db_port: DatabaseEnginePort | None = None,
) -> ExpenseDirectoryPort:
    """Return the expense read adapter."""
    return SqlAlchemyExpenseDirectory(db_port or build_database_adapter())


def build_membership(
    db_port: DatabaseEnginePort | None = None,
) -> MembershipPort:
    """Return the group membership read adapter."""
    return SqlAlchemyMembershipDirectory(db_port or build_database_adapter())


def build_user_directory(
    db_port: DatabaseEnginePort | None = None,
) -> UserDirectoryPort:
    """Return the user read adapter."""
    return SqlAlchemyUserDirectory(db_port or build_database_adapter())


def build_create_settlement_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> CreateSettlementUseCase:
    resolved_db = db_port or build_database_adapter()
    return CreateSettlementUseCase(
        settlements=build_settlement_repository(resolved_db),
        votes=build_vote_repository(resolved_db),
        expenses=build_expense_directory(resolved_db),
        membership=build_membership(resolved_db),
        users=build_user_directory(resolved_db),
    )


def build_get_settlement_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> GetSettlementUseCase:
    resolved_db = db_port or build_database_adapter()
    return GetSettlementUseCase(
        settlements=build_settlement_repository(resolved_db),
        expenses=build_expense_directory(resolved_db),
        membership=build_membership(resolved_db),
        users=build_user_directory(resolved_db),
    )


def build_mark_detail_sent_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> MarkDetailSentUseCase:
    resolved_db = db_port or build_database_adapter()
    return MarkDetailSentUseCase(
        settlements=build_settlement_repository(resolved_db),
        users=build_user_directory(resolved_db),
    )


def build_delete_settlement_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> DeleteSettlementUseCase:
    resolved_db = db_port or build_database_adapter()
    return DeleteSettlementUseCase(
        settlements=build_settlement_repository(resolved_db),
        expenses=build_expense_directory(resolved_db),
        membership=build_membership(resolved_db),
    )


def build_settlement_summary_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> GetSettlementSummaryUseCase:
    resolved_db = db_port or build_database_adapter()
    return GetSettlementSummaryUseCase(build_settlement_repository(resolved_db))


def build_list_pending_transfers_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> ListPendingTransfersUseCase:
    resolved_db = db_port or build_database_adapter()
    return ListPendingTransfersUseCase(
        settlements=build_settlement_repository(resolved_db),
        expenses=build_expense_directory(resolved_db),
        users=build_user_directory(resolved_db),
    )


def build_create_vote_use_case(
    db_port: DatabaseEnginePort | None = None,
    settings: EngineSettings | None = None,
) -> CreateVoteUseCase:
    """Return vote creation wired with the configured default duration."""
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or EngineSettings.from_env()
    return CreateVoteUseCase(
        votes=build_vote_repository(resolved_db, resolved_settings),
        settlements=build_settlement_repository(resolved_db),
        expenses=build_expense_directory(resolved_db),
        membership=build_membership(resolved_db),
        default_duration_hours=resolved_settings.vote_default_duration_hours,
    )


def build_cast_vote_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> CastVoteUseCase:
    resolved_db = db_port or build_database_adapter()
    return CastVoteUseCase(
        votes=build_vote_repository(resolved_db),
        expenses=build_expense_directory(resolved_db),
        membership=build_membership(resolved_db),
    )


def build_get_vote_status_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> GetVoteStatusUseCase:
    resolved_db = db_port or build_database_adapter()
    return GetVoteStatusUseCase(
        votes=build_vote_repository(resolved_db),
        expenses=build_expense_directory(resolved_db),
        membership=build_membership(resolved_db),
    )


def build_delete_vote_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> DeleteVoteUseCase:
    resolved_db = db_port or build_database_adapter()
    return DeleteVoteUseCase(
        votes=build_vote_repository(resolved_db),
        expenses=build_expense_directory(resolved_db),
        membership=build_membership(resolved_db),
    )


def build_close_vote_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> CloseVoteUseCase:
    resolved_db = db_port or build_database_adapter()
    return CloseVoteUseCase(
        votes=build_vote_repository(resolved_db),
        expenses=build_expense_directory(resolved_db),
        membership=build_membership(resolved_db),
    )


def build_extend_vote_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> ExtendVoteUseCase:
    resolved_db = db_port or build_database_adapter()
    return ExtendVoteUseCase(
        votes=build_vote_repository(resolved_db),
        settlements=build_settlement_repository(resolved_db),
        expenses=build_expense_directory(resolved_db),
        membership=build_membership(resolved_db),
    )


def build_close_expired_votes_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> CloseExpiredVotesUseCase:
    """Return the job closing votes whose deadline passed."""
    resolved_db = db_port or build_database_adapter()
    return CloseExpiredVotesUseCase(build_vote_repository(resolved_db))


__all__ = [
    "build_database_adapter",
    "build_settlement_repository",
    "build_vote_repository",
    "build_expense_directory",
    "build_membership",
    "build_user_directory",
    "build_create_settlement_use_case",
    "build_get_settlement_use_case",
    "build_mark_detail_sent_use_case",
    "build_delete_settlement_use_case",
    "build_settlement_summary_use_case",
    "build_list_pending_transfers_use_case",
    "build_create_vote_use_case",
    "build_cast_vote_use_case",
    "build_get_vote_status_use_case",
    "build_delete_vote_use_case",
    "build_close_vote_use_case",
    "build_extend_vote_use_case",
    "build_close_expired_votes_use_case",
]
