from django.conf import settings
from django.db import models
from django.utils import timezone

User = settings.AUTH_USER_MODEL


class PaymentStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    VERIFIED = "verified", "Verified"
    REJECTED = "rejected", "Rejected"


class Payment(models.Model):
    """
    A membership payment. Moves once, from pending to verified or rejected,
    and is never deleted.
    """

    member = models.ForeignKey("membership.Member", on_delete=models.PROTECT, related_name="payments")
    # Plans can be deleted while old payments still point at them
    plan = models.ForeignKey(
        "membership.MembershipPlan",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="payments",
    )
    amount = models.PositiveIntegerField(help_text="In cents")
    payment_method = models.CharField(max_length=50)  # yape, cash, card, transfer...
    payment_date = models.DateTimeField(default=timezone.now)
    status = models.CharField(max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.PENDING)
    receipt_url = models.CharField(max_length=255, null=True, blank=True)
    notes = models.TextField(blank=True, default="")
    verified_by = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name="verified_payments"
    )
    verified_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-payment_date", "-id"]

    def __str__(self):
        return f"Payment #{self.pk} member={self.member_id} {self.amount} ({self.status})"
