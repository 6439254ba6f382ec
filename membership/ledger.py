"""
Membership ledger: the only writer of ``Member.status`` and ``Member.expiry_date``.
"""
import logging

from django.utils import timezone

from .exceptions import NotFound
from .models import MemberStatus

logger = logging.getLogger(__name__)


def sweep_expired_members(store, today=None):
    """
    Flip every active member whose expiry date is before ``today`` to expired.

    Each flip is a conditional update, so a member caught by two overlapping
    sweeps is expired, and audited, once. Returns the members that were flipped.
    """
    today = today or timezone.localdate()
    expired = []
    for member in store.members_expiring_before(today):
        with store.atomic():
            if not store.expire_member(member.id):
                continue
            store.log_activity(
                "membership_expired",
                f"Membership expired for: {member.full_name}",
                member_id=member.id,
            )
        logger.info("Membership expired for member %s (%s), expiry date %s", member.id, member.full_name, member.expiry_date)
        expired.append(member)
    return expired


def list_members(store, today=None):
    """All members, after expiring the ones whose time ran out."""
    sweep_expired_members(store, today=today)
    return store.list_members()


def update_member(store, member_id, **fields):
    """Merge ``fields`` into the member. No validation beyond existence."""
    member = store.update_member(member_id, **fields)
    if member is None:
        raise NotFound("Member", member_id)
    return member


def register_member(store, **fields):
    """
    Sign up a new member. Everyone starts pending with no expiry date; a
    verified payment is what activates them.
    """
    fields.pop("status", None)
    fields.pop("expiry_date", None)
    member = store.create_member(status=MemberStatus.PENDING, expiry_date=None, **fields)
    logger.info("Registered member %s (%s)", member.id, member.email)
    return member
