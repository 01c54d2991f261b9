"""Tests for the shared helpers."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from settlement_engine.utils.decimal_utils import coerce_decimal
from settlement_engine.utils.utils import (
    get_project_root,
    to_naive_utc,
    utcnow,
)


def test_project_root_contains_package():
    assert (get_project_root() / "settlement_engine").is_dir()


def test_to_naive_utc_converts_aware_values():
    aware = datetime(2026, 3, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))

    assert to_naive_utc(aware) == datetime(2026, 3, 1, 12, 30)


def test_to_naive_utc_keeps_naive_values():
    naive = datetime(2026, 3, 1, 12, 30)

    assert to_naive_utc(naive) is naive


def test_utcnow_is_naive():
    assert utcnow().tzinfo is None


def test_coerce_decimal_handles_floats_and_none():
    assert coerce_decimal(None) == Decimal("0")
    assert coerce_decimal(33.33) == Decimal("33.33")
    assert coerce_decimal(Decimal("1.5")) == Decimal("1.5")
