"""Tests for the composition root."""

from sqlalchemy import create_engine

from settlement_engine.application.use_cases import (
    CloseExpiredVotesUseCase,
    CreateSettlementUseCase,
    CreateVoteUseCase,
)
from settlement_engine.infrastructure import container
from settlement_engine.infrastructure.db import StaticEngineAdapter
from settlement_engine.infrastructure.settings import EngineSettings
from settlement_engine.infrastructure.settlement_repository import (
    SqlAlchemySettlementRepository,
)
from settlement_engine.infrastructure.vote_repository import (
    SqlAlchemyVoteRepository,
)


def _db_port(tmp_path):
    return StaticEngineAdapter(
        create_engine(f"sqlite:///{tmp_path / 'container.db'}")
    )


def test_build_vote_repository_uses_retry_setting(tmp_path):
    repository = container.build_vote_repository(
        _db_port(tmp_path),
        EngineSettings(vote_cast_retries=7),
    )

    assert isinstance(repository, SqlAlchemyVoteRepository)
    assert repository._cast_retries == 7


def test_build_create_vote_use_case_uses_duration_setting(tmp_path):
    use_case = container.build_create_vote_use_case(
        _db_port(tmp_path),
        EngineSettings(vote_default_duration_hours=6),
    )

    assert isinstance(use_case, CreateVoteUseCase)
    assert use_case._default_duration.total_seconds() == 6 * 3600


def test_builders_share_the_given_database(tmp_path):
    db_port = _db_port(tmp_path)

    use_case = container.build_create_settlement_use_case(db_port)
    job = container.build_close_expired_votes_use_case(db_port)

    assert isinstance(use_case, CreateSettlementUseCase)
    assert isinstance(use_case._settlements, SqlAlchemySettlementRepository)
    assert use_case._settlements._db_port is db_port
    assert isinstance(job, CloseExpiredVotesUseCase)
    assert job._votes._db_port is db_port


def test_build_database_adapter_defaults_to_singleton_adapter():
    adapter = container.build_database_adapter()

    assert isinstance(adapter, container.SqlAlchemyDatabaseEngineAdapter)
