"""
Response Serializers for Marketplace API Documentation

These serializers define the structure of API responses for OpenAPI schema generation.
They are NOT used for data validation, only for documentation in Swagger/ReDoc.
"""

from rest_framework import serializers

# ===== Common Response Serializers =====


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response"""

    detail = serializers.CharField(help_text="Human-readable error message")


class SuccessResponseSerializer(serializers.Serializer):
    """Generic success response"""

    message = serializers.CharField(help_text="Success message")


class RoleDeniedResponseSerializer(serializers.Serializer):
    """403 body returned when the caller's role is not allowed"""

    detail = serializers.CharField()
    role = serializers.CharField(help_text="Caller's effective role")
    redirect_to = serializers.CharField(help_text="Dashboard route for the caller's role")


class KeywordListResponseSerializer(serializers.Serializer):
    keywords = serializers.ListField(child=serializers.CharField())
