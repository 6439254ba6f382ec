from datetime import date
from io import StringIO

import pytest
from django.core.management import call_command

from activities.models import Activity
from membership import ledger
from membership.exceptions import NotFound
from membership.models import Member, MemberStatus


def make_member(email, status, expiry_date):
    first, last = email.split("@")[0].split(".")
    return Member.objects.create(
        first_name=first.title(), last_name=last.title(), email=email, status=status, expiry_date=expiry_date
    )


@pytest.mark.django_db
def test_sweep_expires_only_lapsed_active_members(store):
    lapsed = make_member("old.timer@example.com", MemberStatus.ACTIVE, date(2024, 2, 29))
    due_today = make_member("due.today@example.com", MemberStatus.ACTIVE, date(2024, 3, 1))
    frozen = make_member("ice.cold@example.com", MemberStatus.FROZEN, date(2024, 1, 1))
    legacy = make_member("old.import@example.com", "vip", date(2024, 1, 1))
    no_expiry = make_member("open.ended@example.com", MemberStatus.ACTIVE, None)

    expired = ledger.sweep_expired_members(store, today=date(2024, 3, 1))

    assert [m.id for m in expired] == [lapsed.id]
    statuses = dict(Member.objects.values_list("id", "status"))
    assert statuses[lapsed.id] == MemberStatus.EXPIRED
    assert statuses[due_today.id] == MemberStatus.ACTIVE
    assert statuses[frozen.id] == MemberStatus.FROZEN
    assert statuses[legacy.id] == "vip"
    assert statuses[no_expiry.id] == MemberStatus.ACTIVE


@pytest.mark.django_db
def test_sweep_audits_each_member_once(store):
    make_member("old.timer@example.com", MemberStatus.ACTIVE, date(2024, 1, 10))

    ledger.sweep_expired_members(store, today=date(2024, 3, 1))
    ledger.sweep_expired_members(store, today=date(2024, 3, 2))

    entries = Activity.objects.filter(activity_type="membership_expired")
    assert entries.count() == 1
    assert entries.get().description == "Membership expired for: Old Timer"


@pytest.mark.django_db
def test_sweep_skips_member_already_flipped_by_another_sweep(store, monkeypatch):
    member = make_member("old.timer@example.com", MemberStatus.ACTIVE, date(2024, 1, 10))
    snapshot = store.members_expiring_before(date(2024, 3, 1))
    # Another process expires the member between the read and the write
    Member.objects.filter(pk=member.pk).update(status=MemberStatus.EXPIRED)
    monkeypatch.setattr(store, "members_expiring_before", lambda day: snapshot)

    assert ledger.sweep_expired_members(store, today=date(2024, 3, 1)) == []
    assert not Activity.objects.filter(activity_type="membership_expired").exists()


@pytest.mark.django_db
def test_list_members_returns_post_sweep_state(store):
    member = make_member("old.timer@example.com", MemberStatus.ACTIVE, date(2024, 1, 10))

    members = list(ledger.list_members(store, today=date(2024, 3, 1)))

    assert [m.id for m in members] == [member.id]
    assert members[0].status == MemberStatus.EXPIRED


@pytest.mark.django_db
def test_update_member_merges_fields(store, member, monthly_plan):
    updated = ledger.update_member(store, member.id, phone="555-0101", plan_id=monthly_plan.id)

    assert updated.phone == "555-0101"
    member.refresh_from_db()
    assert member.plan_id == monthly_plan.id
    assert member.first_name == "Sarah"


@pytest.mark.django_db
def test_update_missing_member_raises(store):
    with pytest.raises(NotFound) as exc:
        ledger.update_member(store, 9999, phone="555")
    assert exc.value.status_code == 404


@pytest.mark.django_db
def test_expire_memberships_command():
    make_member("old.timer@example.com", MemberStatus.ACTIVE, date(2000, 1, 1))
    out = StringIO()

    call_command("expire_memberships", stdout=out)

    assert "1 membership(s) expired" in out.getvalue()
    assert Member.objects.get().status == MemberStatus.EXPIRED
