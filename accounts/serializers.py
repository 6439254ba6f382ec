from rest_framework import serializers

from .models import User


class UserSerializer(serializers.ModelSerializer):
    is_gym_admin = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "name", "role", "phone", "avatar_url", "is_gym_admin"]
        read_only_fields = ["role"]
