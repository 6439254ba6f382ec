from django.conf import settings
from django.db import models
from django.utils import timezone

User = settings.AUTH_USER_MODEL


class Activity(models.Model):
    """Append-only audit trail entry shown on the dashboard and member profile."""

    # Free text: the backend emits member_*, membership_* and payment_* kinds, the front-end posts its own
    activity_type = models.CharField(max_length=50)
    description = models.TextField()
    timestamp = models.DateTimeField(default=timezone.now)
    member = models.ForeignKey(
        "membership.Member", null=True, blank=True, on_delete=models.SET_NULL, related_name="activities"
    )
    user = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name="activities")

    class Meta:
        ordering = ["-timestamp", "-id"]
        verbose_name_plural = "activities"

    def __str__(self):
        return f"[{self.activity_type}] {self.description}"
