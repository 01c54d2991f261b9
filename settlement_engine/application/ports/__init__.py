"""Application ports package."""

from .collaborators import (
    ExpenseDirectoryPort,
    MembershipPort,
    UserDirectoryPort,
)
from .database import DatabaseEnginePort
from .settlement_repository import SettlementRepositoryPort
from .vote_repository import VoteRepositoryPort

__all__ = [
    "DatabaseEnginePort",
    "ExpenseDirectoryPort",
    "MembershipPort",
    "UserDirectoryPort",
    "SettlementRepositoryPort",
    "VoteRepositoryPort",
]
