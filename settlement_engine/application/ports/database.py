"""Database port for the settlement engine.

Application code depends on this protocol instead of concrete drivers or
configuration details. Infrastructure provides the SQLAlchemy adapter.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the engine that stores settlements and votes."""

    def get_engine(self) -> Engine:
        """Get the engine for the settlement database.

        Returns:
            Engine: SQLAlchemy engine holding settlement and vote tables.
        """


__all__ = ["DatabaseEnginePort"]
