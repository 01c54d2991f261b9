"""Domain validation helpers for allocation inputs."""

from collections.abc import Iterable, Sequence
from decimal import Decimal, InvalidOperation

from settlement_engine.domain.constants import PERCENT_TOLERANCE, PERCENT_TOTAL
from settlement_engine.domain.errors import ValidationError
from settlement_engine.domain.models.allocation import DirectEntry, PercentEntry
from settlement_engine.utils.decimal_utils import coerce_decimal


def validate_unique_users(user_ids: Iterable[int], label: str) -> None:
    """Reject inputs that mention the same user twice.

    Args:
        user_ids: User ids in input order.
        label: Name of the input, used in the error message.

    Raises:
        ValidationError: On the first duplicated id.
    """
    seen: set[int] = set()
    for user_id in user_ids:
        if user_id in seen:
            raise ValidationError(f"Duplicate user {user_id} in {label}")
        seen.add(user_id)


def validate_direct_entries(
    entries: Sequence[DirectEntry],
    expense_amount: int,
) -> None:
    """Check DIRECT amounts are non-negative and add up to the expense.

    The payer's own entry counts toward the sum even though it never becomes
    a transfer.

    Raises:
        ValidationError: On a negative amount or a sum mismatch.
    """
    for entry in entries:
        if entry.amount < 0:
            raise ValidationError(
                f"Negative amount {entry.amount} for user {entry.user_id}"
            )
    total = sum(entry.amount for entry in entries)
    if total != expense_amount:
        raise ValidationError(
            f"Direct amounts sum to {total} but the expense total is "
            f"{expense_amount}"
        )


def validate_percent_entries(entries: Sequence[PercentEntry]) -> None:
    """Check PERCENT ratios are non-negative and sum to 100 within 0.01.

    Raises:
        ValidationError: On a non-numeric, non-finite or negative ratio, or
            a sum outside the tolerance.
    """
    ratios = [_finite_ratio(entry) for entry in entries]
    for entry, ratio in zip(entries, ratios):
        if ratio < 0:
            raise ValidationError(
                f"Negative ratio {ratio} for user {entry.user_id}"
            )
    total = sum(ratios, coerce_decimal(0))
    if abs(total - PERCENT_TOTAL) > PERCENT_TOLERANCE:
        raise ValidationError(f"Ratios sum to {total}%, expected 100%")


def _finite_ratio(entry: PercentEntry) -> Decimal:
    try:
        ratio = coerce_decimal(entry.ratio)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValidationError(
            f"Ratio {entry.ratio!r} for user {entry.user_id} is not a number"
        ) from exc
    if not ratio.is_finite():
        raise ValidationError(
            f"Ratio {ratio} for user {entry.user_id} must be finite"
        )
    return ratio


__all__ = [
    "validate_unique_users",
    "validate_direct_entries",
    "validate_percent_entries",
]
