"""Allocation requests, one dataclass per settlement method.

The union ``Allocation`` is what callers hand to the settlement aggregator;
each variant carries only the inputs its method needs.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar, Union

from settlement_engine.domain.models.settlement import SettlementMethod


@dataclass(frozen=True)
class DirectEntry:
    """Amount a user should bear under the DIRECT method."""

    user_id: int
    amount: int


@dataclass(frozen=True)
class PercentEntry:
    """Percentage of the total a user should bear under PERCENT."""

    user_id: int
    ratio: Decimal | float | int


@dataclass(frozen=True)
class EqualAllocation:
    """Split the total evenly.

    Attributes:
        participant_ids: Users sharing the expense. ``None`` means the
            expense's own participant list.
    """

    participant_ids: tuple[int, ...] | None = None
    method: ClassVar[SettlementMethod] = SettlementMethod.EQUAL


@dataclass(frozen=True)
class DirectAllocation:
    """Use caller-provided amounts per user."""

    entries: tuple[DirectEntry, ...]
    method: ClassVar[SettlementMethod] = SettlementMethod.DIRECT


@dataclass(frozen=True)
class PercentAllocation:
    """Split the total by caller-provided percentages."""

    entries: tuple[PercentEntry, ...]
    method: ClassVar[SettlementMethod] = SettlementMethod.PERCENT


@dataclass(frozen=True)
class ItemAllocation:
    """Split by the item vote attached to the expense."""

    method: ClassVar[SettlementMethod] = SettlementMethod.ITEM


Allocation = Union[
    EqualAllocation,
    DirectAllocation,
    PercentAllocation,
    ItemAllocation,
]


__all__ = [
    "DirectEntry",
    "PercentEntry",
    "EqualAllocation",
    "DirectAllocation",
    "PercentAllocation",
    "ItemAllocation",
    "Allocation",
]
