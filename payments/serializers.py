from django.contrib.auth import get_user_model
from django.core.exceptions import ObjectDoesNotExist
from rest_framework import serializers

from .models import Payment, PaymentStatus

UNKNOWN_PLAN = "Unknown plan"


class PaymentSerializer(serializers.ModelSerializer):
    member_name = serializers.CharField(source="member.full_name", read_only=True)
    plan_name = serializers.SerializerMethodField()

    class Meta:
        model = Payment
        fields = [
            "id", "member", "member_name", "plan", "plan_name", "amount", "payment_method",
            "payment_date", "status", "receipt_url", "notes", "verified_by", "verified_at",
        ]
        read_only_fields = fields

    def get_plan_name(self, obj):
        # The plan may have been deleted since; payments keep the dangling id
        try:
            plan = obj.plan
        except ObjectDoesNotExist:
            plan = None
        return plan.name if plan else UNKNOWN_PLAN


class PaymentCreateSerializer(serializers.Serializer):
    member_id = serializers.IntegerField()
    plan_id = serializers.IntegerField()
    amount = serializers.IntegerField(min_value=1)
    payment_method = serializers.CharField(max_length=50)
    payment_date = serializers.DateTimeField(required=False)
    status = serializers.ChoiceField(
        choices=[PaymentStatus.PENDING, PaymentStatus.VERIFIED], required=False, allow_blank=True
    )
    # Truncated by the workflow, not rejected
    receipt_url = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True)
    verified_by = serializers.PrimaryKeyRelatedField(
        queryset=get_user_model().objects.all(), required=False, allow_null=True
    )


class RejectPaymentSerializer(serializers.Serializer):
    notes = serializers.CharField(required=False, allow_blank=True)


class PublicPaymentSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, max_length=200)
    first_name = serializers.CharField(required=False, allow_blank=True, max_length=100)
    last_name = serializers.CharField(required=False, allow_blank=True, max_length=100)
    email = serializers.EmailField()
    phone = serializers.CharField(required=False, allow_blank=True, max_length=32)
    plan_id = serializers.IntegerField()
    receipt_url = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    payment_method = serializers.CharField(required=False, allow_blank=True, max_length=50)


class PendingPaymentSerializer(PaymentSerializer):
    """What a member may see about their own pending payments, no staff notes."""

    class Meta(PaymentSerializer.Meta):
        fields = ["id", "plan", "plan_name", "amount", "payment_method", "payment_date", "status"]
        read_only_fields = fields
