from django.db import models
from django.utils import timezone


class MemberStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    ACTIVE = "active", "Active"
    EXPIRED = "expired", "Expired"
    FROZEN = "frozen", "Frozen"

    @classmethod
    def parse(cls, raw):
        """Known status for a stored value, or None for legacy/unknown text."""
        try:
            return cls(raw)
        except ValueError:
            return None


class MembershipPlan(models.Model):
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    price = models.PositiveIntegerField(help_text="In cents")
    duration = models.PositiveIntegerField(default=1, help_text="How many duration_type units one payment buys")
    # Free text: daily/weekly/monthly/yearly, plus legacy day/week/month/year/annual
    duration_type = models.CharField(max_length=20, default="monthly")
    features = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["price", "id"]

    def __str__(self):
        return f"{self.name} ({self.duration} {self.duration_type})"


class Member(models.Model):
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=32, blank=True, default="")
    address = models.CharField(max_length=255, blank=True, default="")
    join_date = models.DateField(default=timezone.localdate)
    plan = models.ForeignKey(
        MembershipPlan, null=True, blank=True, on_delete=models.SET_NULL, related_name="members"
    )
    # Not restricted to MemberStatus: imported and hand-edited rows carry other values
    status = models.CharField(max_length=20, default=MemberStatus.PENDING)
    expiry_date = models.DateField(null=True, blank=True)
    avatar_url = models.URLField(max_length=500, blank=True, default="")
    emergency_contact = models.CharField(max_length=150, blank=True, default="")
    emergency_phone = models.CharField(max_length=32, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    class Meta:
        ordering = ["id"]
        indexes = [models.Index(fields=["status", "expiry_date"], name="member_status_expiry_idx")]

    def __str__(self):
        return self.full_name

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def status_kind(self):
        return MemberStatus.parse(self.status)
