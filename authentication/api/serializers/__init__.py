from .auth_serializers import (
    LoginSerializer,
    LogoutSerializer,
    RoleChangeSerializer,
    SellerSerializer,
    UserRegistrationSerializer,
    UserSerializer,
)


__all__ = [
    "UserSerializer",
    "UserRegistrationSerializer",
    "LoginSerializer",
    "LogoutSerializer",
    "RoleChangeSerializer",
    "SellerSerializer",
]
