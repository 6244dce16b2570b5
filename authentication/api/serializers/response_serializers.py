"""
Response Serializers for API Documentation

These serializers define the structure of API responses for OpenAPI schema generation.
They are NOT used for data validation, only for documentation in Swagger/ReDoc.
"""

from rest_framework import serializers

from .auth_serializers import UserSerializer


# ===== Authentication Response Serializers =====


class TokenPairResponseSerializer(serializers.Serializer):
    """Response for successful login or registration"""

    message = serializers.CharField(help_text="Success message")
    access = serializers.CharField(help_text="JWT access token")
    refresh = serializers.CharField(help_text="JWT refresh token")
    user = UserSerializer(help_text="User details")


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class RoleChangeResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user_id = serializers.UUIDField()
    role = serializers.CharField()


class RoleDeniedResponseSerializer(serializers.Serializer):
    """403 body returned when the caller's role is not allowed"""

    detail = serializers.CharField()
    role = serializers.CharField(help_text="Caller's effective role")
    redirect_to = serializers.CharField(help_text="Dashboard route for the caller's role")


# ===== Generic Error Response Serializers =====


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response"""

    error = serializers.CharField(help_text="Error message")
    details = serializers.DictField(help_text="Additional error details", required=False, allow_null=True)
