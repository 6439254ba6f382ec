"""The ledger and payment rules against the dict-backed store, no database involved."""
from datetime import date
from io import StringIO
from unittest.mock import patch

import pytest
from django.core.management import call_command

from membership import ledger, reports
from membership.exceptions import InvalidTransition, NotFound
from membership.models import MemberStatus
from membership.stores import InMemoryStore
from payments import workflow
from payments.models import PaymentStatus

from .conftest import aware


def test_create_verified_payment_activates_member(memory_store, memory_member, memory_plan):
    now = aware(2024, 1, 31)
    payment = workflow.create_payment(
        memory_store,
        {"member_id": memory_member.id, "plan_id": memory_plan.id, "amount": 2999, "payment_method": "cash"},
        now=now,
    )

    member = memory_store.get_member(memory_member.id)
    assert payment.status == PaymentStatus.VERIFIED
    assert member.status == MemberStatus.ACTIVE
    # Jan 31 + 1 month clamps to Feb 29, then one day of padding
    assert member.expiry_date == date(2024, 3, 1)
    assert [a.activity_type for a in memory_store.activities] == ["payment_created", "membership_activated"]


def test_verify_is_guarded(memory_store, memory_member, memory_plan):
    payment = workflow.create_payment(
        memory_store,
        {
            "member_id": memory_member.id,
            "plan_id": memory_plan.id,
            "amount": 2999,
            "payment_method": "yape",
            "status": "pending",
        },
    )
    admin = next(iter(memory_store.users.values()))

    workflow.verify_payment(memory_store, payment.id, admin.id, now=aware(2024, 3, 1))
    with pytest.raises(InvalidTransition):
        workflow.verify_payment(memory_store, payment.id, admin.id, now=aware(2024, 3, 1))

    assert memory_store.get_member(memory_member.id).expiry_date == date(2024, 4, 1)
    verified = memory_store.activities_of_type("payment_verified")
    assert [a.description for a in verified] == ["Payment from Emma Garcia for Monthly verified by Gym Admin"]


def test_failed_extension_rolls_back_payment(memory_store, memory_member, memory_plan):
    with patch("payments.workflow.ledger.update_member", side_effect=RuntimeError("store down")):
        with pytest.raises(RuntimeError):
            workflow.create_payment(
                memory_store,
                {"member_id": memory_member.id, "plan_id": memory_plan.id, "amount": 2999, "payment_method": "cash"},
            )

    assert memory_store.payments == {}
    assert memory_store.activities == []
    assert memory_store.get_member(memory_member.id).status == MemberStatus.PENDING


def test_sweep_flips_each_member_once(memory_store):
    lapsed = memory_store.create_member(
        first_name="Old", last_name="Timer", email="old@example.com",
        status=MemberStatus.ACTIVE, expiry_date=date(2024, 1, 10),
    )
    memory_store.create_member(
        first_name="Legacy", last_name="Row", email="legacy@example.com", status="vip", expiry_date=date(2024, 1, 10)
    )

    first = ledger.sweep_expired_members(memory_store, today=date(2024, 3, 1))
    second = ledger.sweep_expired_members(memory_store, today=date(2024, 3, 1))

    assert [m.id for m in first] == [lapsed.id]
    assert second == []
    assert len(memory_store.activities_of_type("membership_expired")) == 1


def test_update_missing_member(memory_store):
    with pytest.raises(NotFound):
        ledger.update_member(memory_store, 404, phone="1")


def test_register_member_always_starts_pending(memory_store, memory_plan):
    member = ledger.register_member(
        memory_store,
        first_name="Ana", last_name="Flores", email="ana@example.com",
        plan_id=memory_plan.id, status=MemberStatus.ACTIVE, expiry_date=date(2030, 1, 1),
    )

    assert member.status == MemberStatus.PENDING
    assert member.expiry_date is None
    assert member.plan_id == memory_plan.id
    # Nothing for the sweep to pick up
    assert ledger.sweep_expired_members(memory_store, today=date(2031, 1, 1)) == []


def test_member_stats(memory_store, memory_plan):
    yearly = memory_store.add_plan(name="Yearly", price=29999, duration=1, duration_type="yearly")
    memory_store.create_member(
        first_name="Emma", last_name="Garcia", email="emma@example.com", plan_id=memory_plan.id,
        status=MemberStatus.ACTIVE, expiry_date=date(2024, 4, 1), join_date=date(2024, 3, 5),
    )
    memory_store.create_member(
        first_name="Old", last_name="Timer", email="old@example.com", plan_id=yearly.id,
        status=MemberStatus.ACTIVE, expiry_date=date(2024, 2, 1), join_date=date(2023, 2, 1),
    )
    memory_store.create_member(
        first_name="Legacy", last_name="Row", email="legacy@example.com", status="vip", join_date=date(2024, 1, 20)
    )

    stats = reports.member_stats(memory_store, today=date(2024, 3, 15))

    assert stats["members_by_status"] == {"pending": 0, "active": 1, "expired": 1, "frozen": 0}
    assert stats["plan_stats"] == [
        {"id": memory_plan.id, "name": "Monthly", "count": 1},
        {"id": yearly.id, "name": "Yearly", "count": 0},
    ]
    assert stats["total_members"] == 3
    assert [m["month_year"] for m in stats["monthly_signups"]] == [
        "Oct 2023", "Nov 2023", "Dec 2023", "Jan 2024", "Feb 2024", "Mar 2024",
    ]
    assert [m["signups"] for m in stats["monthly_signups"]] == [0, 0, 0, 1, 0, 1]
    assert stats["monthly_signups"][0]["month"] == "Oct"


def test_submit_public_payment(memory_store, memory_plan):
    result = workflow.submit_public_payment(
        memory_store, {"name": "Ana Flores", "email": "ana@example.com", "plan_id": memory_plan.id}
    )

    assert result["member"].status == MemberStatus.PENDING
    assert result["payment"].amount == memory_plan.price
    assert result["payment"].notes == "Pending verification for Ana Flores (ana@example.com)"


def test_store_reports_missing_records():
    store = InMemoryStore()
    assert store.get_plan(1) is None
    assert store.claim_payment(1, PaymentStatus.PENDING, status=PaymentStatus.VERIFIED) is None
    assert store.expire_member(1) is False


def test_seed_gym_dry_run_writes_nothing_to_the_database():
    out = StringIO()

    call_command("seed_gym", "--dry-run", stdout=out)

    output = out.getvalue()
    assert "Sarah Williams: active until" in output
    assert "Luis Quispe: pending until None" in output
    assert "5 new members" in output
