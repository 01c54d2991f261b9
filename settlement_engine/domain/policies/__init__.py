"""Domain policies package."""

from .vote_policy import ensure_future_deadline, is_vote_expired

__all__ = ["ensure_future_deadline", "is_vote_expired"]
