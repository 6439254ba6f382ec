# activities/utils.py
import logging

from django.db import DatabaseError, transaction
from django.utils import timezone

from .models import Activity

logger = logging.getLogger(__name__)


def record_activity(activity_type, description, member_id=None, user_id=None, timestamp=None):
    """
    Append an audit entry.

    Fire-and-forget: a failed insert is logged and swallowed inside its own
    savepoint, so the surrounding payment or membership change still commits.
    """
    try:
        with transaction.atomic():
            return Activity.objects.create(
                activity_type=activity_type,
                description=description,
                member_id=member_id,
                user_id=user_id,
                timestamp=timestamp or timezone.now(),
            )
    except DatabaseError:
        logger.exception("Could not record %s activity: %s", activity_type, description)
        return None
