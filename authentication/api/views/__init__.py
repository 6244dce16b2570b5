from .auth_views import (
    LoginAPIView,
    LogoutAPIView,
    MeView,
    RefreshRoleView,
    RegisterAPIView,
    RoleManagementView,
    SellerDetailView,
)


__all__ = [
    "LoginAPIView",
    "RegisterAPIView",
    "LogoutAPIView",
    "MeView",
    "RefreshRoleView",
    "RoleManagementView",
    "SellerDetailView",
]
