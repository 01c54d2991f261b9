"""Tests for the vote use cases."""

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from settlement_engine.application.use_cases.cast_vote import CastVoteUseCase
from settlement_engine.application.use_cases.close_vote import (
    CloseExpiredVotesUseCase,
    CloseVoteUseCase,
    ExtendVoteUseCase,
)
from settlement_engine.application.use_cases.create_settlement import (
    CreateSettlementUseCase,
)
from settlement_engine.application.use_cases.create_vote import (
    CreateVoteUseCase,
)
from settlement_engine.application.use_cases.delete_vote import (
    DeleteVoteUseCase,
)
from settlement_engine.application.use_cases.get_vote_status import (
    GetVoteStatusUseCase,
)
from settlement_engine.domain.errors import (
    AccessDeniedError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from settlement_engine.domain.models.allocation import EqualAllocation
from settlement_engine.domain.models.vote import CastAction


PAYER, BOB, CAROL, DAVE, OUTSIDER = 1, 2, 3, 4, 9
EXPENSE = 100
NOW = datetime(2026, 3, 1, 12, 0)


def _create(world, **kwargs) -> CreateVoteUseCase:
    return CreateVoteUseCase(
        votes=world.votes,
        settlements=world.settlements,
        expenses=world.expenses,
        membership=world.membership,
        clock=world.clock,
        logger=world.logger,
        **kwargs,
    )


def _cast(world) -> CastVoteUseCase:
    return CastVoteUseCase(
        votes=world.votes,
        expenses=world.expenses,
        membership=world.membership,
        logger=world.logger,
    )


def _status(world) -> GetVoteStatusUseCase:
    return GetVoteStatusUseCase(
        votes=world.votes,
        expenses=world.expenses,
        membership=world.membership,
    )


def _option_for(view, item_name):
    return next(
        option.option_id
        for option in view.options
        if option.item_name == item_name
    )


def test_create_vote_builds_one_option_per_item(world):
    view = _create(world).execute(EXPENSE, PAYER)

    assert view.closed is False
    assert [(o.item_name, o.price) for o in view.options] == [
        ("Pizza", 6000),
        ("Wine", 4000),
    ]
    assert view.close_at == NOW + timedelta(hours=24)


def test_create_vote_uses_configured_duration(world):
    view = _create(world, default_duration_hours=2).execute(EXPENSE, PAYER)

    assert view.close_at == NOW + timedelta(hours=2)


def test_create_vote_normalizes_aware_deadline(world):
    close_at = datetime(2026, 3, 2, 14, 0, tzinfo=timezone(timedelta(hours=2)))

    view = _create(world).execute(EXPENSE, PAYER, close_at=close_at)

    assert view.close_at == datetime(2026, 3, 2, 12, 0)


def test_create_vote_rejects_past_deadline(world):
    with pytest.raises(ValidationError):
        _create(world).execute(
            EXPENSE,
            PAYER,
            close_at=NOW - timedelta(minutes=5),
        )


def test_create_vote_is_idempotent(world):
    """A second call returns the existing vote untouched."""
    first = _create(world).execute(EXPENSE, PAYER)
    second = _create(world).execute(EXPENSE, BOB)

    assert second == first
    assert len(world.votes.votes) == 1


def test_create_vote_after_settlement_conflicts(world):
    CreateSettlementUseCase(
        settlements=world.settlements,
        votes=world.votes,
        expenses=world.expenses,
        membership=world.membership,
        users=world.users,
        logger=world.logger,
    ).execute(EXPENSE, EqualAllocation(), PAYER)

    with pytest.raises(ConflictError):
        _create(world).execute(EXPENSE, PAYER)


def test_create_vote_requires_items(world):
    world.expenses.expenses[EXPENSE] = replace(
        world.expenses.expenses[EXPENSE],
        items=(),
    )

    with pytest.raises(ValidationError, match="no line items"):
        _create(world).execute(EXPENSE, PAYER)


def test_create_vote_checks_expense_and_membership(world):
    with pytest.raises(NotFoundError):
        _create(world).execute(404, PAYER)
    with pytest.raises(AccessDeniedError):
        _create(world).execute(EXPENSE, OUTSIDER)


def test_cast_twice_retracts(world):
    """Toggling the same option twice leaves no vote behind."""
    view = _create(world).execute(EXPENSE, PAYER)
    pizza = _option_for(view, "Pizza")
    cast = _cast(world)

    first = cast.execute(pizza, BOB)
    second = cast.execute(pizza, BOB)

    assert first.action is CastAction.CAST
    assert first.item_name == "Pizza"
    assert second.action is CastAction.RETRACTED
    assert world.votes.user_votes == set()


def test_cast_reports_when_everyone_voted(world):
    view = _create(world).execute(EXPENSE, PAYER)
    pizza = _option_for(view, "Pizza")
    wine = _option_for(view, "Wine")
    cast = _cast(world)

    assert cast.execute(pizza, BOB).all_participants_voted is False
    assert cast.execute(wine, CAROL).all_participants_voted is False
    result = cast.execute(wine, PAYER)

    assert result.all_participants_voted is True
    world.logger.info.assert_any_call(
        "All participants of expense 100 have voted; payer 1 can settle"
    )


def test_cast_requires_participant(world):
    """Dave is a group member but did not take part in the expense."""
    view = _create(world).execute(EXPENSE, PAYER)
    pizza = _option_for(view, "Pizza")

    with pytest.raises(AccessDeniedError, match="not a participant"):
        _cast(world).execute(pizza, DAVE)
    with pytest.raises(AccessDeniedError, match="not a member"):
        _cast(world).execute(pizza, OUTSIDER)


def test_cast_on_closed_vote_conflicts(world):
    view = _create(world).execute(EXPENSE, PAYER)
    world.votes.close(view.vote_id)

    with pytest.raises(ConflictError):
        _cast(world).execute(_option_for(view, "Pizza"), BOB)


def test_cast_unknown_option(world):
    with pytest.raises(NotFoundError):
        _cast(world).execute(999, BOB)


def test_vote_status_lists_voters_and_non_voters(world):
    view = _create(world).execute(EXPENSE, PAYER)
    cast = _cast(world)
    cast.execute(_option_for(view, "Pizza"), BOB)
    cast.execute(_option_for(view, "Pizza"), CAROL)

    status = _status(world).execute(EXPENSE, acting_user_id=DAVE)

    assert [(o.item_name, o.voter_ids) for o in status.per_option] == [
        ("Pizza", [BOB, CAROL]),
        ("Wine", []),
    ]
    assert status.non_voter_ids == [PAYER]
    assert status.closed is False


def test_vote_status_without_vote(world):
    with pytest.raises(NotFoundError):
        _status(world).execute(EXPENSE)

    _create(world).execute(EXPENSE, PAYER)
    with pytest.raises(AccessDeniedError):
        _status(world).execute(EXPENSE, acting_user_id=OUTSIDER)


def _delete(world) -> DeleteVoteUseCase:
    return DeleteVoteUseCase(
        votes=world.votes,
        expenses=world.expenses,
        membership=world.membership,
        logger=world.logger,
    )


def test_delete_open_vote_removes_user_votes(world):
    view = _create(world).execute(EXPENSE, PAYER)
    _cast(world).execute(_option_for(view, "Wine"), BOB)

    _delete(world).execute(EXPENSE, acting_user_id=PAYER)

    assert world.votes.get_by_expense(EXPENSE) is None
    assert world.votes.user_votes == set()


def test_delete_closed_or_missing_vote(world):
    with pytest.raises(NotFoundError):
        _delete(world).execute(EXPENSE)

    view = _create(world).execute(EXPENSE, PAYER)
    world.votes.close(view.vote_id)
    with pytest.raises(ConflictError):
        _delete(world).execute(EXPENSE)
    assert world.votes.get(view.vote_id) is not None


def test_owner_closes_vote(world):
    view = _create(world).execute(EXPENSE, PAYER)
    close = CloseVoteUseCase(
        votes=world.votes,
        expenses=world.expenses,
        membership=world.membership,
        logger=world.logger,
    )

    with pytest.raises(AccessDeniedError):
        close.execute(EXPENSE, BOB)
    closed = close.execute(EXPENSE, PAYER)

    assert closed.id == view.vote_id
    assert closed.closed is True
    with pytest.raises(ConflictError):
        close.execute(EXPENSE, PAYER)


def _extend(world) -> ExtendVoteUseCase:
    return ExtendVoteUseCase(
        votes=world.votes,
        settlements=world.settlements,
        expenses=world.expenses,
        membership=world.membership,
        clock=world.clock,
        logger=world.logger,
    )


def test_extend_vote_moves_deadline(world):
    _create(world).execute(EXPENSE, PAYER)
    new_close_at = NOW + timedelta(days=3)

    vote = _extend(world).execute(EXPENSE, new_close_at, PAYER)

    assert vote.close_at == new_close_at


def test_extend_vote_rules(world):
    view = _create(world).execute(EXPENSE, PAYER)
    extend = _extend(world)

    with pytest.raises(AccessDeniedError):
        extend.execute(EXPENSE, NOW + timedelta(days=1), BOB)
    with pytest.raises(ValidationError):
        extend.execute(EXPENSE, NOW - timedelta(days=1), PAYER)

    world.votes.close(view.vote_id)
    with pytest.raises(ConflictError):
        extend.execute(EXPENSE, NOW + timedelta(days=1), PAYER)


def test_close_expired_votes(world):
    view = _create(world).execute(EXPENSE, PAYER)
    job = CloseExpiredVotesUseCase(world.votes, logger=world.logger)

    assert job.run(now=NOW) == []
    assert job.run(now=NOW + timedelta(hours=24)) == [view.vote_id]
    assert world.votes.get(view.vote_id).closed is True
    assert job.run(now=NOW + timedelta(days=2)) == []
