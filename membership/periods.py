"""
Membership period arithmetic.

A plan buys ``duration`` units of ``duration_type``. Calendar months and years
go through relativedelta, which clamps to the last day of a shorter month:
Jan 31 + 1 month is Feb 29 (leap) / Feb 28, and Feb 29 + 1 year is Feb 28.
"""
import enum
from dataclasses import dataclass
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta


class DurationUnit(enum.Enum):
    DAY = "daily"
    WEEK = "weekly"
    MONTH = "monthly"
    YEAR = "yearly"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw):
        # Case-sensitive on purpose: stored values are lowercase
        return _UNIT_NAMES.get(raw, cls.UNKNOWN)


_UNIT_NAMES = {
    "daily": DurationUnit.DAY,
    "day": DurationUnit.DAY,
    "weekly": DurationUnit.WEEK,
    "week": DurationUnit.WEEK,
    "monthly": DurationUnit.MONTH,
    "month": DurationUnit.MONTH,
    "yearly": DurationUnit.YEAR,
    "year": DurationUnit.YEAR,
    "annual": DurationUnit.YEAR,
}


def effective_duration(duration) -> int:
    if isinstance(duration, int) and duration > 0:
        return duration
    return 1


def add_duration(base: date, duration, duration_type) -> date:
    """Add ``duration`` units of ``duration_type`` to ``base``; unknown types count days."""
    count = effective_duration(duration)
    unit = DurationUnit.parse(duration_type)
    if unit is DurationUnit.MONTH:
        return base + relativedelta(months=count)
    if unit is DurationUnit.YEAR:
        return base + relativedelta(years=count)
    if unit is DurationUnit.WEEK:
        return base + timedelta(weeks=count)
    return base + timedelta(days=count)


class BaseDate(enum.Enum):
    PAYMENT_DATE = "payment_date"
    CURRENT_EXPIRY_OR_TODAY = "current_expiry_or_today"


@dataclass(frozen=True)
class ExtensionPolicy:
    base_date: BaseDate
    padding_days: int = 0


# A payment recorded as already verified: counted from the day it was paid,
# plus one day so it never expires on the day it was bought.
ON_CREATE = ExtensionPolicy(BaseDate.PAYMENT_DATE, padding_days=1)

# An admin verifying a pending payment: stacks on top of the time the member
# still has left, or starts today if the membership already lapsed.
ON_VERIFY = ExtensionPolicy(BaseDate.CURRENT_EXPIRY_OR_TODAY, padding_days=0)


def base_date_for(policy: ExtensionPolicy, *, payment_date=None, current_expiry=None, today=None) -> date:
    if policy.base_date is BaseDate.PAYMENT_DATE:
        if payment_date is None:
            raise ValueError("payment_date is required for a payment-date policy")
        return payment_date
    if today is None:
        raise ValueError("today is required for a current-expiry policy")
    if current_expiry and current_expiry >= today:
        return current_expiry
    return today


def compute_expiry(policy: ExtensionPolicy, plan, *, payment_date=None, current_expiry=None, today=None) -> date:
    """New expiry date for ``plan`` under ``policy``. Always later than the base date."""
    base = base_date_for(policy, payment_date=payment_date, current_expiry=current_expiry, today=today)
    expiry = add_duration(base, plan.duration, plan.duration_type)
    if policy.padding_days:
        expiry += timedelta(days=policy.padding_days)
    return expiry
