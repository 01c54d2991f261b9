"""Tests for allocation input validation."""

from decimal import Decimal

import pytest

from settlement_engine.domain.errors import ValidationError
from settlement_engine.domain.models.allocation import DirectEntry, PercentEntry
from settlement_engine.domain.services.validation import (
    validate_direct_entries,
    validate_percent_entries,
    validate_unique_users,
)


def test_validate_unique_users_rejects_duplicates():
    with pytest.raises(ValidationError, match="Duplicate user 2"):
        validate_unique_users([1, 2, 2], "participants")


def test_validate_unique_users_accepts_distinct_ids():
    validate_unique_users([1, 2, 3], "participants")


def test_direct_entries_must_sum_to_expense_amount():
    """The payer's entry counts toward the total."""
    entries = [DirectEntry(1, 4000), DirectEntry(2, 6000)]

    validate_direct_entries(entries, 10000)
    with pytest.raises(ValidationError, match="sum to 10000"):
        validate_direct_entries(entries, 12000)


def test_direct_entries_reject_negative_amounts():
    entries = [DirectEntry(2, -100), DirectEntry(3, 10100)]

    with pytest.raises(ValidationError, match="Negative amount"):
        validate_direct_entries(entries, 10000)


def test_percent_entries_accept_rounding_tolerance():
    """Three thirds written as 33.33 sum to 99.99, within 0.01 of 100."""
    entries = [
        PercentEntry(1, Decimal("33.33")),
        PercentEntry(2, Decimal("33.33")),
        PercentEntry(3, Decimal("33.33")),
    ]

    validate_percent_entries(entries)


def test_percent_entries_reject_sum_outside_tolerance():
    entries = [PercentEntry(1, 50), PercentEntry(2, 40)]

    with pytest.raises(ValidationError, match="expected 100%"):
        validate_percent_entries(entries)


def test_percent_entries_reject_negative_ratio():
    entries = [PercentEntry(1, 110), PercentEntry(2, -10)]

    with pytest.raises(ValidationError, match="Negative ratio"):
        validate_percent_entries(entries)


@pytest.mark.parametrize(
    "ratio",
    [float("nan"), float("inf"), Decimal("-Infinity")],
)
def test_percent_entries_reject_non_finite_ratio(ratio):
    entries = [PercentEntry(2, ratio), PercentEntry(3, 100)]

    with pytest.raises(ValidationError, match="must be finite"):
        validate_percent_entries(entries)


def test_percent_entries_reject_non_numeric_ratio():
    entries = [PercentEntry(2, "half"), PercentEntry(3, 50)]

    with pytest.raises(ValidationError, match="is not a number"):
        validate_percent_entries(entries)
