from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from authentication.permissions import ClientRequired, RoleRequired, SellerRequired
from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer, RoleDeniedResponseSerializer
from marketplace.api.views.errors import error_response
from marketplace.filters import OrderFilter, cleaned_filters
from marketplace.ordering.api.serializers import (
    BuyNowRequestSerializer,
    CheckoutRequestSerializer,
    OrderSerializer,
    OrderStatusUpdateSerializer,
)
from marketplace.ordering.domain.services import OrderService
from utils.rbac import ROLE_ADMIN, ROLE_SELLER


class SellerOrAdminRequired(RoleRequired):
    required_roles = (ROLE_SELLER, ROLE_ADMIN)


class OrderViewSet(viewsets.ViewSet):
    lookup_value_regex = "[0-9a-f-]{36}"

    def get_service(self) -> OrderService:
        return container.order_service()

    def get_permissions(self):
        if self.action in ["checkout", "buy_now"]:
            return [ClientRequired()]
        if self.action == "seller_orders":
            return [SellerRequired()]
        if self.action == "update_status":
            return [SellerOrAdminRequired()]
        return [IsAuthenticated()]

    def orders_response(self, result, http_status=status.HTTP_200_OK):
        if not result.ok:
            return error_response(result)
        return Response(OrderSerializer(result.value, many=True).data, status=http_status)

    @extend_schema(
        operation_id="orders_list",
        summary="List orders visible to the caller",
        description="""
        **What it returns:**
        - Clients: the orders they placed
        - Sellers: the orders for their products
        - Admins: every order

        Newest first.
        """,
        parameters=[OpenApiParameter(name="status", type=str, description="Filter by order status")],
        responses={
            200: OrderSerializer(many=True),
            400: OpenApiResponse(description="Invalid status filter"),
        },
        tags=["Marketplace - Orders"],
    )
    def list(self, request):
        filters, errors = cleaned_filters(OrderFilter, request.query_params)
        if errors:
            return Response(errors, status=status.HTTP_400_BAD_REQUEST)
        return self.orders_response(self.get_service().list_orders(request.user, filters.get("status")))

    @extend_schema(
        operation_id="orders_retrieve",
        summary="Order details",
        responses={
            200: OrderSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Orders"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_order(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(OrderSerializer(result.value).data)

    @extend_schema(
        operation_id="orders_checkout",
        summary="Check out the cart (client)",
        description="""
        **What it receives:**
        - `shipping_address`: required, not blank

        **What it returns:**
        - One pending order per cart line. The cart is cleared afterwards.
        """,
        request=CheckoutRequestSerializer,
        responses={
            201: OrderSerializer(many=True),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Empty cart or missing address"),
            403: OpenApiResponse(response=RoleDeniedResponseSerializer, description="Not a client"),
        },
        tags=["Marketplace - Orders"],
    )
    @action(detail=False, methods=["post"])
    def checkout(self, request):
        serializer = CheckoutRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().place_order(
            request.user, quantity=1, address=serializer.validated_data["shipping_address"]
        )
        return self.orders_response(result, status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="orders_buy_now",
        summary="Buy a single product now (client)",
        description="Places one pending order for the product. The cart is not touched.",
        request=BuyNowRequestSerializer,
        responses={
            201: OrderSerializer(many=True),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid quantity or missing address"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Orders"],
    )
    @action(detail=False, methods=["post"])
    def buy_now(self, request):
        serializer = BuyNowRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        result = self.get_service().place_order(
            request.user,
            quantity=data["quantity"],
            address=data["shipping_address"],
            product_id=data["product_id"],
        )
        return self.orders_response(result, status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="orders_update_status",
        summary="Change order status (seller/admin)",
        description="""
        Allowed transitions:
        - pending -> confirmed | cancelled
        - confirmed -> completed | cancelled
        """,
        request=OrderStatusUpdateSerializer,
        responses={
            200: OrderSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Transition not allowed"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the order's seller"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Orders"],
    )
    @action(detail=True, methods=["post"], url_path="status")
    def update_status(self, request, pk=None):
        serializer = OrderStatusUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().update_order_status(request.user, pk, serializer.validated_data["status"])
        if not result.ok:
            return error_response(result)
        return Response(OrderSerializer(result.value).data)

    @extend_schema(
        operation_id="orders_seller_orders",
        summary="Orders for the calling seller's products",
        responses={200: OrderSerializer(many=True)},
        tags=["Marketplace - Orders"],
    )
    @action(detail=False, methods=["get"])
    def seller_orders(self, request):
        return self.orders_response(self.get_service().seller_orders(request.user))
