from datetime import date
from types import SimpleNamespace

import pytest

from membership.periods import (
    ON_CREATE,
    ON_VERIFY,
    BaseDate,
    DurationUnit,
    ExtensionPolicy,
    add_duration,
    compute_expiry,
)


def plan(duration=1, duration_type="monthly"):
    return SimpleNamespace(duration=duration, duration_type=duration_type)


# ----------------------
# Duration units
# ----------------------
@pytest.mark.parametrize(
    "raw, unit",
    [
        ("daily", DurationUnit.DAY),
        ("day", DurationUnit.DAY),
        ("weekly", DurationUnit.WEEK),
        ("week", DurationUnit.WEEK),
        ("monthly", DurationUnit.MONTH),
        ("month", DurationUnit.MONTH),
        ("yearly", DurationUnit.YEAR),
        ("year", DurationUnit.YEAR),
        ("annual", DurationUnit.YEAR),
        ("fortnightly", DurationUnit.UNKNOWN),
        ("Monthly", DurationUnit.UNKNOWN),
        (None, DurationUnit.UNKNOWN),
    ],
)
def test_parse_duration_unit(raw, unit):
    assert DurationUnit.parse(raw) is unit


def test_add_one_month():
    assert add_duration(date(2024, 1, 15), 1, "monthly") == date(2024, 2, 15)


def test_month_end_clamps_to_last_day():
    assert add_duration(date(2024, 1, 31), 3, "month") == date(2024, 4, 30)
    assert add_duration(date(2023, 1, 31), 1, "monthly") == date(2023, 2, 28)


def test_leap_day_plus_one_year_clamps():
    assert add_duration(date(2024, 2, 29), 1, "yearly") == date(2025, 2, 28)


def test_weeks_and_days():
    assert add_duration(date(2024, 3, 1), 2, "weekly") == date(2024, 3, 15)
    assert add_duration(date(2024, 3, 1), 10, "daily") == date(2024, 3, 11)


def test_unknown_type_counts_days():
    assert add_duration(date(2024, 3, 1), 5, "sessions") == date(2024, 3, 6)


@pytest.mark.parametrize("duration", [0, -3, None])
def test_non_positive_duration_counts_as_one(duration):
    assert add_duration(date(2024, 1, 15), duration, "monthly") == date(2024, 2, 15)


# ----------------------
# Extension policies
# ----------------------
def test_on_create_anchors_at_payment_date_with_padding():
    expiry = compute_expiry(ON_CREATE, plan(), payment_date=date(2024, 1, 15), current_expiry=date(2024, 6, 1))
    assert expiry == date(2024, 2, 16)


def test_on_verify_stacks_on_remaining_time():
    expiry = compute_expiry(ON_VERIFY, plan(), current_expiry=date(2024, 3, 10), today=date(2024, 3, 1))
    assert expiry == date(2024, 4, 10)


def test_on_verify_expiring_today_still_stacks():
    expiry = compute_expiry(ON_VERIFY, plan(), current_expiry=date(2024, 3, 1), today=date(2024, 3, 1))
    assert expiry == date(2024, 4, 1)


def test_on_verify_restarts_from_today_when_lapsed():
    expiry = compute_expiry(ON_VERIFY, plan(), current_expiry=date(2024, 1, 1), today=date(2024, 3, 1))
    assert expiry == date(2024, 4, 1)


def test_on_verify_without_expiry_starts_today():
    expiry = compute_expiry(ON_VERIFY, plan(3, "monthly"), current_expiry=None, today=date(2024, 3, 1))
    assert expiry == date(2024, 6, 1)


def test_custom_policy_padding():
    policy = ExtensionPolicy(BaseDate.CURRENT_EXPIRY_OR_TODAY, padding_days=2)
    expiry = compute_expiry(policy, plan(1, "weekly"), today=date(2024, 3, 1))
    assert expiry == date(2024, 3, 10)


def test_payment_date_policy_requires_payment_date():
    with pytest.raises(ValueError):
        compute_expiry(ON_CREATE, plan(), today=date(2024, 3, 1))
