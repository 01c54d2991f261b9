"""Application use cases package."""

from .cast_vote import CastVoteUseCase
from .close_vote import (
    CloseExpiredVotesUseCase,
    CloseVoteUseCase,
    ExtendVoteUseCase,
)
from .create_settlement import CreateSettlementUseCase
from .create_vote import CreateVoteUseCase
from .delete_settlement import DeleteSettlementUseCase
from .delete_vote import DeleteVoteUseCase
from .get_settlement import GetSettlementUseCase
from .get_settlement_summary import (
    GetSettlementSummaryUseCase,
    ListPendingTransfersUseCase,
)
from .get_vote_status import GetVoteStatusUseCase
from .mark_detail_sent import MarkDetailSentUseCase

__all__ = [
    "CreateSettlementUseCase",
    "GetSettlementUseCase",
    "MarkDetailSentUseCase",
    "DeleteSettlementUseCase",
    "GetSettlementSummaryUseCase",
    "ListPendingTransfersUseCase",
    "CreateVoteUseCase",
    "CastVoteUseCase",
    "GetVoteStatusUseCase",
    "DeleteVoteUseCase",
    "CloseVoteUseCase",
    "ExtendVoteUseCase",
    "CloseExpiredVotesUseCase",
]
