from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.permissions import AdminRequired, ClientRequired, SellerRequired
from infrastructure.container import container
from marketplace.analytics.api.serializers import (
    AdminDashboardSerializer,
    ClientDashboardSerializer,
    SellerDashboardSerializer,
)
from marketplace.api.serializers import ErrorResponseSerializer, RoleDeniedResponseSerializer
from marketplace.api.views.errors import error_response


class ClientDashboardView(APIView):
    permission_classes = [ClientRequired]

    @extend_schema(
        operation_id="dashboard_client",
        summary="Client dashboard",
        responses={
            200: ClientDashboardSerializer,
            403: OpenApiResponse(response=RoleDeniedResponseSerializer, description="Not a client"),
        },
        tags=["Marketplace - Dashboards"],
    )
    def get(self, request):
        result = container.dashboard_service().client_dashboard(request.user)
        if not result.ok:
            return error_response(result)
        return Response(ClientDashboardSerializer(result.value).data)


class SellerDashboardView(APIView):
    permission_classes = [SellerRequired]

    @extend_schema(
        operation_id="dashboard_seller",
        summary="Seller dashboard for the current month",
        responses={
            200: SellerDashboardSerializer,
            403: OpenApiResponse(response=RoleDeniedResponseSerializer, description="Not a seller"),
        },
        tags=["Marketplace - Dashboards"],
    )
    def get(self, request):
        result = container.dashboard_service().seller_dashboard(request.user)
        if not result.ok:
            return error_response(result)
        return Response(SellerDashboardSerializer(result.value).data)


class AdminDashboardView(APIView):
    permission_classes = [AdminRequired]

    @extend_schema(
        operation_id="dashboard_admin",
        summary="Admin analytics dashboard",
        description="""
        **What it returns:**
        - `orders`: totals, daily/monthly/yearly counts, status breakdown, per product and per client
        - `products`: best sellers, total value sold, average order value
        - `sellers`: orders and validation rate per seller, top performers
        - `financial`: revenue windows, costs, profit margin, storage costs, net profit
        - `clients`: per client activity and the most active client
        """,
        responses={
            200: AdminDashboardSerializer,
            403: OpenApiResponse(response=RoleDeniedResponseSerializer, description="Not an admin"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Dashboard could not be built"),
        },
        tags=["Marketplace - Dashboards"],
    )
    def get(self, request):
        result = container.admin_analytics_service().get_dashboard_data(request.user)
        if not result.ok:
            return error_response(result)
        return Response(result.value)
