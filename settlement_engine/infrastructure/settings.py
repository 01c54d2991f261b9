"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from typing import Optional

from settlement_engine.domain.constants import DEFAULT_VOTE_DURATION_HOURS
from settlement_engine.infrastructure.db import DB_URL_ENV
from settlement_engine.infrastructure.logging.logger import get_app_logger
from settlement_engine.infrastructure.vote_repository import (
    DEFAULT_CAST_RETRIES,
)


@dataclass(frozen=True)
class EngineSettings:
    """Runtime settings of the settlement engine.

    Attributes:
        db_url: Database URL, or None when unset.
        vote_default_duration_hours: Vote lifetime used when no deadline is
            given at creation.
        vote_cast_retries: Attempts made when concurrent casts collide.
    """

    db_url: Optional[str] = None
    vote_default_duration_hours: int = DEFAULT_VOTE_DURATION_HOURS
    vote_cast_retries: int = DEFAULT_CAST_RETRIES

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Build settings from environment variables.

        Returns:
            EngineSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        return cls(
            db_url=os.getenv(DB_URL_ENV) or None,
            vote_default_duration_hours=cls._positive_int(
                "VOTE_DEFAULT_DURATION_HOURS",
                DEFAULT_VOTE_DURATION_HOURS,
                logger=logger,
            ),
            vote_cast_retries=cls._positive_int(
                "VOTE_CAST_RETRIES",
                DEFAULT_CAST_RETRIES,
                logger=logger,
            ),
        )

    @staticmethod
    def _positive_int(name: str, default: int, logger) -> int:
        """Read a positive integer, falling back to ``default``.

        Args:
            name: Environment variable name.
            default: Value used when the variable is unset or invalid.
            logger: Logger used for warnings.

        Returns:
            int: Parsed value or the default.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw.strip())
        except ValueError:
            logger.warning(f"Ignoring non-integer {name}={raw!r}")
            return default
        if value <= 0:
            logger.warning(f"Ignoring non-positive {name}={value}")
            return default
        return value


__all__ = ["EngineSettings"]
