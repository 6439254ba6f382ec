from rest_framework import serializers

from activities.serializers import ActivitySerializer
from payments.models import PaymentStatus
from payments.serializers import PaymentSerializer
from .models import Member, MembershipPlan


class MembershipPlanSerializer(serializers.ModelSerializer):
    class Meta:
        model = MembershipPlan
        fields = "__all__"


class MemberSerializer(serializers.ModelSerializer):
    plan = MembershipPlanSerializer(read_only=True)
    plan_id = serializers.PrimaryKeyRelatedField(
        queryset=MembershipPlan.objects.all(), source="plan", write_only=True, required=False, allow_null=True
    )
    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = Member
        fields = [
            "id", "first_name", "last_name", "full_name", "email", "phone", "address",
            "join_date", "plan", "plan_id", "status", "expiry_date",
            "avatar_url", "emergency_contact", "emergency_phone", "notes",
        ]


class MemberCreateSerializer(MemberSerializer):
    """New members start pending; status and expiry come from verified payments."""

    class Meta(MemberSerializer.Meta):
        read_only_fields = ["status", "expiry_date"]


class MemberDetailSerializer(MemberSerializer):
    payments = PaymentSerializer(many=True, read_only=True)
    activities = ActivitySerializer(many=True, read_only=True)
    stats = serializers.SerializerMethodField()

    class Meta(MemberSerializer.Meta):
        fields = MemberSerializer.Meta.fields + ["payments", "activities", "stats"]

    def get_stats(self, obj):
        statuses = [payment.status for payment in obj.payments.all()]
        return {
            "verified_payments": statuses.count(PaymentStatus.VERIFIED),
            "pending_payments": statuses.count(PaymentStatus.PENDING),
            "total_payments": len(statuses),
        }
