# payments/workflow.py
"""
Payment workflow: recording, verifying and rejecting membership payments.

A payment moves once, from pending to verified or rejected. Verification is
what buys membership time; the ledger does the actual member write.
"""
import logging
from datetime import datetime

from django.conf import settings
from django.utils import timezone

from membership import ledger
from membership.exceptions import InvalidTransition, NotFound, ValidationFailure
from membership.models import MemberStatus
from membership.periods import ON_CREATE, ON_VERIFY, compute_expiry

from .models import PaymentStatus

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("member_id", "plan_id", "amount", "payment_method")
CREATE_STATUSES = (PaymentStatus.PENDING, PaymentStatus.VERIFIED)


def _as_date(value):
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            return timezone.localdate(value)
        return value.date()
    return value


def _format_amount(cents):
    return f"{cents / 100:.2f} {settings.GYM_CURRENCY}"


def _admin_name(store, admin_id):
    admin = store.get_user(admin_id) if admin_id else None
    if admin is None:
        return "an administrator"
    return getattr(admin, "name", "") or admin.email


def _truncate_receipt(url):
    if not url:
        return None
    return url[: settings.GYM_RECEIPT_URL_MAX_LENGTH]


def _require(store_getter, entity, pk):
    record = store_getter(pk)
    if record is None:
        raise NotFound(entity, pk)
    return record


def extend_membership(store, member, plan, policy, *, payment_date=None, today=None, user_id=None):
    """Activate ``member`` on ``plan`` and push the expiry date out under ``policy``."""
    expiry = compute_expiry(
        policy,
        plan,
        payment_date=payment_date,
        current_expiry=member.expiry_date,
        today=today or timezone.localdate(),
    )
    member = ledger.update_member(
        store, member.id, status=MemberStatus.ACTIVE, plan_id=plan.id, expiry_date=expiry
    )
    store.log_activity(
        "membership_activated",
        f"{plan.name} membership activated for {member.full_name}",
        member_id=member.id,
        user_id=user_id,
    )
    logger.info("Member %s active on plan %s until %s", member.id, plan.id, expiry)
    return member


def create_payment(store, data, *, now=None):
    """
    Record a payment. ``status`` defaults to verified: a payment taken at the
    desk is trusted and activates the membership straight away.
    """
    now = now or timezone.now()

    missing = [name for name in REQUIRED_FIELDS if data.get(name) in (None, "")]
    if missing:
        raise ValidationFailure("Missing required fields: " + ", ".join(missing), fields=missing)

    amount = data["amount"]
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise ValidationFailure("amount must be a positive number of cents.", fields=["amount"])

    status = data.get("status") or PaymentStatus.VERIFIED
    if status not in CREATE_STATUSES:
        raise ValidationFailure("A new payment must be pending or verified.", fields=["status"])

    member = _require(store.get_member, "Member", data["member_id"])
    plan = _require(store.get_plan, "Plan", data["plan_id"])

    verified = status == PaymentStatus.VERIFIED
    payment_date = data.get("payment_date") or now

    with store.atomic():
        payment = store.create_payment(
            member_id=member.id,
            plan_id=plan.id,
            amount=amount,
            payment_method=data["payment_method"],
            payment_date=payment_date,
            status=status,
            receipt_url=_truncate_receipt(data.get("receipt_url")),
            notes=data.get("notes") or "",
            verified_by_id=data.get("verified_by_id") if verified else None,
            verified_at=now if verified else None,
        )
        store.log_activity(
            "payment_created",
            f"{member.full_name} registered a payment of {_format_amount(amount)} for {plan.name}",
            member_id=member.id,
            user_id=payment.verified_by_id,
        )
        if verified:
            extend_membership(
                store,
                member,
                plan,
                ON_CREATE,
                payment_date=_as_date(payment_date),
                user_id=payment.verified_by_id,
            )

    logger.info("Payment %s recorded for member %s (%s)", payment.id, member.id, status)
    return payment


def _pending_payment(store, payment_id):
    payment = _require(store.get_payment, "Payment", payment_id)
    if payment.status != PaymentStatus.PENDING:
        raise InvalidTransition(f"Payment {payment_id} is already {payment.status}.")
    return payment


def verify_payment(store, payment_id, admin_id, *, now=None):
    """
    Verify a pending payment and extend the member from their remaining time,
    or from today if it already ran out. Raises InvalidTransition for a payment
    that is no longer pending, so a repeated click never adds time twice.
    """
    now = now or timezone.now()
    payment = _pending_payment(store, payment_id)
    member = _require(store.get_member, "Member", payment.member_id)
    plan = _require(store.get_plan, "Plan", payment.plan_id)
    admin_name = _admin_name(store, admin_id)

    with store.atomic():
        payment = store.claim_payment(
            payment_id,
            PaymentStatus.PENDING,
            status=PaymentStatus.VERIFIED,
            verified_by_id=admin_id,
            verified_at=now,
        )
        if payment is None:
            raise InvalidTransition(f"Payment {payment_id} is no longer pending.")
        store.log_activity(
            "payment_verified",
            f"Payment from {member.full_name} for {plan.name} verified by {admin_name}",
            member_id=member.id,
            user_id=admin_id,
        )
        extend_membership(store, member, plan, ON_VERIFY, today=_as_date(now), user_id=admin_id)

    logger.info("Payment %s verified by user %s", payment_id, admin_id)
    return payment


def reject_payment(store, payment_id, admin_id, notes=None, *, now=None):
    now = now or timezone.now()
    payment = _pending_payment(store, payment_id)
    member = store.get_member(payment.member_id)
    admin_name = _admin_name(store, admin_id)

    fields = {"status": PaymentStatus.REJECTED, "verified_by_id": admin_id, "verified_at": now}
    if notes:
        fields["notes"] = notes

    with store.atomic():
        payment = store.claim_payment(payment_id, PaymentStatus.PENDING, **fields)
        if payment is None:
            raise InvalidTransition(f"Payment {payment_id} is no longer pending.")
        who = member.full_name if member else f"member {payment.member_id}"
        description = f"Payment from {who} rejected by {admin_name}"
        if notes:
            description += f": {notes}"
        store.log_activity("payment_rejected", description, member_id=payment.member_id, user_id=admin_id)

    logger.info("Payment %s rejected by user %s", payment_id, admin_id)
    return payment


def _split_name(name):
    first, _, last = (name or "").strip().partition(" ")
    return first, last.strip()


def _reference_number(now):
    millis = str(int(now.timestamp() * 1000))
    return settings.GYM_PUBLIC_REFERENCE_PREFIX + millis[5:]


def submit_public_payment(store, data, *, now=None):
    """
    Public "I already paid" form. Finds the member by email, or signs them up
    as pending, and queues a pending payment for the plan's price. An admin
    verifies it later from the pending list.
    """
    now = now or timezone.now()

    missing = [name for name in ("email", "plan_id") if not data.get(name)]
    if missing:
        raise ValidationFailure("Missing required fields: " + ", ".join(missing), fields=missing)

    plan = _require(store.get_plan, "Plan", data["plan_id"])
    email = data["email"]
    name = data.get("name") or ""

    with store.atomic():
        member = store.get_member_by_email(email)
        if member is None:
            first_name, last_name = _split_name(name)
            member = ledger.register_member(
                store,
                first_name=data.get("first_name") or first_name or email.split("@")[0],
                last_name=data.get("last_name") or last_name,
                email=email,
                phone=data.get("phone") or "",
                plan_id=plan.id,
                join_date=_as_date(now),
            )
            logger.info("Created pending member %s from a public payment", member.id)

        payment = store.create_payment(
            member_id=member.id,
            plan_id=plan.id,
            amount=plan.price,
            payment_method=data.get("payment_method") or settings.GYM_PUBLIC_PAYMENT_METHOD,
            payment_date=now,
            status=PaymentStatus.PENDING,
            receipt_url=_truncate_receipt(data.get("receipt_url")),
            notes=f"Pending verification for {name or member.full_name} ({email})",
        )
        store.log_activity(
            "payment_submitted",
            f"New {payment.payment_method} payment received for {plan.name} plan - pending verification",
            member_id=member.id,
        )

    return {
        "payment": payment,
        "member": member,
        "reference_number": _reference_number(now),
    }
