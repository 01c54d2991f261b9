"""Rules for the vote deadline."""

from datetime import datetime

from settlement_engine.domain.errors import ValidationError
from settlement_engine.domain.models.vote import Vote


def is_vote_expired(vote: Vote, now: datetime) -> bool:
    """Return True when an open vote has passed its deadline."""
    if vote.closed or vote.close_at is None:
        return False
    return vote.close_at <= now


def ensure_future_deadline(close_at: datetime, now: datetime) -> None:
    """Reject deadlines that are not after ``now``.

    Raises:
        ValidationError: If ``close_at`` is not in the future.
    """
    if close_at <= now:
        raise ValidationError(
            f"Vote deadline {close_at.isoformat()} must be in the future"
        )


__all__ = ["is_vote_expired", "ensure_future_deadline"]
