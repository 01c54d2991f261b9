"""Pure share computation for the EQUAL, DIRECT and PERCENT methods.

Rounding policy: every share is floor-divided and the remainder stays with
the payer without being recorded anywhere. The payer never appears as a
debtor.
"""

from collections.abc import Sequence
from decimal import ROUND_FLOOR, Decimal

from settlement_engine.domain.constants import PERCENT_TOTAL
from settlement_engine.domain.errors import ValidationError
from settlement_engine.domain.models.allocation import DirectEntry, PercentEntry
from settlement_engine.domain.models.settlement import Share
from settlement_engine.utils.decimal_utils import coerce_decimal


def allocate_equal(
    total_amount: int,
    payer_id: int,
    participant_ids: Sequence[int],
) -> list[Share]:
    """Split ``total_amount`` evenly across participants.

    Args:
        total_amount: Expense total in minor currency units.
        payer_id: User who paid; excluded from the result.
        participant_ids: Everyone sharing the cost, payer included if they
            consumed too.

    Returns:
        list[Share]: One share per non-payer participant.

    Raises:
        ValidationError: If ``participant_ids`` is empty.
    """
    if not participant_ids:
        raise ValidationError("no participants")
    per_person = total_amount // len(participant_ids)
    return [
        Share(debtor_id=user_id, amount=per_person)
        for user_id in participant_ids
        if user_id != payer_id
    ]


def allocate_direct(
    payer_id: int,
    entries: Sequence[DirectEntry],
) -> list[Share]:
    """Pass caller-provided amounts through, dropping the payer's entry.

    Raises:
        ValidationError: If ``entries`` is empty.
    """
    if not entries:
        raise ValidationError("no direct settlement entries")
    return [
        Share(debtor_id=entry.user_id, amount=entry.amount)
        for entry in entries
        if entry.user_id != payer_id
    ]


def allocate_percent(
    total_amount: int,
    payer_id: int,
    entries: Sequence[PercentEntry],
) -> list[Share]:
    """Compute ``floor(total_amount * ratio / 100)`` per entry.

    Ratios are not checked against 100 here; the aggregator does that before
    calling.

    Raises:
        ValidationError: If ``entries`` is empty.
    """
    if not entries:
        raise ValidationError("no percent settlement entries")
    total = Decimal(total_amount)
    shares = []
    for entry in entries:
        if entry.user_id == payer_id:
            continue
        raw = total * coerce_decimal(entry.ratio) / PERCENT_TOTAL
        amount = int(raw.to_integral_value(rounding=ROUND_FLOOR))
        shares.append(Share(debtor_id=entry.user_id, amount=amount))
    return shares


__all__ = ["allocate_equal", "allocate_direct", "allocate_percent"]
