"""Dashboard figures computed from the post-sweep member list."""
from collections import Counter

from dateutil.relativedelta import relativedelta
from django.utils import timezone

from . import ledger
from .models import MemberStatus

SIGNUP_MONTHS = 6


def member_stats(store, today=None):
    """
    Members per known status, active members per plan, signups for each of
    the last six calendar months (current one included) and the total.
    Members with an unknown status only count towards the total.
    """
    today = today or timezone.localdate()
    members = list(ledger.list_members(store, today=today))

    by_status = {status.value: 0 for status in MemberStatus}
    active_by_plan = Counter()
    for member in members:
        kind = member.status_kind
        if kind is not None:
            by_status[kind.value] += 1
        if kind is MemberStatus.ACTIVE:
            active_by_plan[member.plan_id] += 1

    plan_stats = [
        {"id": plan.id, "name": plan.name, "count": active_by_plan.get(plan.id, 0)}
        for plan in store.list_plans()
    ]

    this_month = today.replace(day=1)
    monthly_signups = []
    for offset in range(SIGNUP_MONTHS - 1, -1, -1):
        start = this_month - relativedelta(months=offset)
        end = start + relativedelta(months=1)
        monthly_signups.append({
            "month": start.strftime("%b"),
            "month_year": start.strftime("%b %Y"),
            "signups": sum(1 for m in members if m.join_date and start <= m.join_date < end),
        })

    return {
        "members_by_status": by_status,
        "plan_stats": plan_stats,
        "monthly_signups": monthly_signups,
        "total_members": len(members),
    }
