from rest_framework import serializers
from .models import Activity


class ActivitySerializer(serializers.ModelSerializer):
    member_name = serializers.CharField(source="member.full_name", read_only=True, default=None)

    class Meta:
        model = Activity
        fields = ["id", "activity_type", "description", "timestamp", "member", "member_name", "user"]


class ActivityCreateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Activity
        fields = ["id", "activity_type", "description", "member", "timestamp"]
        read_only_fields = ["id", "timestamp"]
