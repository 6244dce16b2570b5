from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from authentication.api.views import (
    LoginAPIView,
    LogoutAPIView,
    MeView,
    RefreshRoleView,
    RegisterAPIView,
    RoleManagementView,
    SellerDetailView,
    health_views,
    metrics_views,
)


urlpatterns = [
    # Auth
    path("register/", RegisterAPIView.as_view(), name="register"),
    path("login/", LoginAPIView.as_view(), name="login"),
    path("logout/", LogoutAPIView.as_view(), name="logout"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    # Session user
    path("me/", MeView.as_view(), name="me"),
    path("me/refresh-role/", RefreshRoleView.as_view(), name="refresh_role"),
    # Roles & sellers
    path("roles/", RoleManagementView.as_view(), name="roles"),
    path("sellers/<uuid:pk>/", SellerDetailView.as_view(), name="seller_detail"),
    # Observability & Health
    path("metrics/", metrics_views.metrics, name="metrics"),
    path("health/live/", health_views.health_live, name="health_live"),
    path("health/ready/", health_views.health_ready, name="health_ready"),
]
