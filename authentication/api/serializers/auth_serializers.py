from rest_framework import serializers

from authentication.domain.models import CustomUser, Seller, UserRole
from utils.rbac import dashboard_route_for, resolve_role


class UserSerializer(serializers.ModelSerializer):
    name = serializers.SerializerMethodField()
    role = serializers.SerializerMethodField()
    dashboard = serializers.SerializerMethodField()

    class Meta:
        model = CustomUser
        fields = ("id", "email", "name", "role", "dashboard", "date_joined")
        read_only_fields = fields

    def get_name(self, obj) -> str:
        return obj.get_display_name()

    def get_role(self, obj) -> str:
        return resolve_role(obj)

    def get_dashboard(self, obj) -> str:
        return dashboard_route_for(resolve_role(obj))


class UserRegistrationSerializer(serializers.Serializer):
    """Input for sign up. Uniqueness and password strength are checked by AuthService."""

    name = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField(required=False, allow_blank=True)


class RoleChangeSerializer(serializers.Serializer):
    ACTION_CHOICES = (("grant", "Grant"), ("revoke", "Revoke"))

    user_id = serializers.UUIDField()
    role = serializers.ChoiceField(choices=UserRole.ROLE_CHOICES)
    action = serializers.ChoiceField(choices=ACTION_CHOICES, default="grant")


class SellerSerializer(serializers.ModelSerializer):
    id = serializers.UUIDField(source="user_id", read_only=True)

    class Meta:
        model = Seller
        fields = ("id", "name", "contact_email", "created_at")
        read_only_fields = fields
