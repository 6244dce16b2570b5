# Marketplace API Serializers

# Import response serializers for API documentation
from .response_serializers import (
    ErrorResponseSerializer,
    KeywordListResponseSerializer,
    RoleDeniedResponseSerializer,
    SuccessResponseSerializer,
)


__all__ = [
    "ErrorResponseSerializer",
    "SuccessResponseSerializer",
    "RoleDeniedResponseSerializer",
    "KeywordListResponseSerializer",
]
