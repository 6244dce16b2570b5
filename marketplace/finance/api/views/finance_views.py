from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.permissions import SellerRequired
from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer, RoleDeniedResponseSerializer
from marketplace.api.views.errors import error_response
from marketplace.finance.api.serializers import (
    PaymentCreateSerializer,
    PaymentSerializer,
    StorageCostCreateSerializer,
    StorageCostSerializer,
    StorageCostUpdateSerializer,
)


class PaymentListCreateView(APIView):
    permission_classes = [SellerRequired]

    @extend_schema(
        operation_id="finance_payments_list",
        summary="Payments on the seller's orders",
        responses={
            200: PaymentSerializer(many=True),
            403: OpenApiResponse(response=RoleDeniedResponseSerializer, description="Not a seller"),
        },
        tags=["Marketplace - Finance"],
    )
    def get(self, request):
        result = container.financial_service().list_payments(request.user)
        if not result.ok:
            return error_response(result)
        return Response(PaymentSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="finance_payments_create",
        summary="Record a payment",
        description="The margin is derived as amount - cost.",
        request=PaymentCreateSerializer,
        responses={
            201: PaymentSerializer,
            400: OpenApiResponse(description="Invalid payment data"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Finance"],
    )
    def post(self, request):
        serializer = PaymentCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        result = container.financial_service().add_payment(
            request.user, data["order_id"], data["amount"], data["cost"], data.get("payment_date")
        )
        if not result.ok:
            return error_response(result)
        return Response(PaymentSerializer(result.value).data, status=status.HTTP_201_CREATED)


class StorageCostListCreateView(APIView):
    permission_classes = [SellerRequired]

    @extend_schema(
        operation_id="finance_storage_costs_list",
        summary="Storage costs of the seller's products",
        responses={200: StorageCostSerializer(many=True)},
        tags=["Marketplace - Finance"],
    )
    def get(self, request):
        result = container.financial_service().list_storage_costs(request.user)
        if not result.ok:
            return error_response(result)
        return Response(StorageCostSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="finance_storage_costs_create",
        summary="Record a monthly storage cost",
        request=StorageCostCreateSerializer,
        responses={
            201: StorageCostSerializer,
            400: OpenApiResponse(description="Invalid storage cost data"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Finance"],
    )
    def post(self, request):
        serializer = StorageCostCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        result = container.financial_service().add_storage_cost(
            request.user, data["product_id"], data["cost_amount"], data["month"], data["year"]
        )
        if not result.ok:
            return error_response(result)
        return Response(StorageCostSerializer(result.value).data, status=status.HTTP_201_CREATED)


class StorageCostDetailView(APIView):
    permission_classes = [SellerRequired]

    @extend_schema(
        operation_id="finance_storage_costs_update",
        summary="Update a storage cost",
        request=StorageCostUpdateSerializer,
        responses={
            200: StorageCostSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Storage cost not found"),
        },
        tags=["Marketplace - Finance"],
    )
    def patch(self, request, pk):
        serializer = StorageCostUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = container.financial_service().update_storage_cost(request.user, pk, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(StorageCostSerializer(result.value).data)

    @extend_schema(
        operation_id="finance_storage_costs_delete",
        summary="Delete a storage cost",
        responses={
            204: None,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Storage cost not found"),
        },
        tags=["Marketplace - Finance"],
    )
    def delete(self, request, pk):
        result = container.financial_service().delete_storage_cost(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)
