from .dashboard_serializers import AdminDashboardSerializer, ClientDashboardSerializer, SellerDashboardSerializer


__all__ = ["AdminDashboardSerializer", "ClientDashboardSerializer", "SellerDashboardSerializer"]
