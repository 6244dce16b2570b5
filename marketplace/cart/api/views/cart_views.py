from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import container  # For DI
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.api.views.errors import error_response
from marketplace.cart.api.serializers import (
    AddToCartRequestSerializer,
    CartServiceOutputSerializer,
    RemoveFromCartRequestSerializer,
    RestoreCartRequestSerializer,
    UpdateCartRequestSerializer,
)
from marketplace.cart.domain.services import CartService


class CartViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    def get_service(self) -> CartService:
        # Inject CartService via DI container
        return container.cart_service()

    def cart_response(self, result):
        if not result.ok:
            return error_response(result)
        return Response(CartServiceOutputSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="cart_get",
        summary="Get user's shopping cart",
        description="""
        **What it receives:**
        - Authentication token (header)

        **What it returns:**
        - Cart lines with fresh product details
        - Total price and total quantity
        """,
        responses={
            200: OpenApiResponse(response=CartServiceOutputSerializer, description="Cart retrieved successfully"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Internal server error"),
        },
        tags=["Marketplace - Cart"],
    )
    def list(self, request):
        return self.cart_response(self.get_service().get_cart(request.user))

    @extend_schema(
        operation_id="cart_add_item",
        summary="Add item to cart",
        description="""
        **What it receives:**
        - `product_id` (UUID): Product to add
        - `quantity` (integer, optional): Quantity to add (default: 1)

        An item already in the cart has its quantity increased.
        """,
        request=AddToCartRequestSerializer,
        responses={
            200: OpenApiResponse(response=CartServiceOutputSerializer, description="Item added successfully"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Cart"],
    )
    @action(detail=False, methods=["post"])
    def add_item(self, request):
        serializer = AddToCartRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        return self.cart_response(self.get_service().add_to_cart(request.user, data["product_id"], data["quantity"]))

    @extend_schema(
        operation_id="cart_update_item",
        summary="Update item quantity in cart",
        description="A quantity of zero or less removes the item.",
        request=UpdateCartRequestSerializer,
        responses={
            200: OpenApiResponse(response=CartServiceOutputSerializer, description="Item updated successfully"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Item not in cart"),
        },
        tags=["Marketplace - Cart"],
    )
    @action(detail=False, methods=["patch"])
    def update_item(self, request):
        serializer = UpdateCartRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        return self.cart_response(
            self.get_service().update_quantity(request.user, data["product_id"], data["quantity"])
        )

    @extend_schema(
        operation_id="cart_remove_item",
        summary="Remove item from cart",
        request=RemoveFromCartRequestSerializer,
        responses={
            200: OpenApiResponse(response=CartServiceOutputSerializer, description="Item removed successfully"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid product_id"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Item not in cart"),
        },
        tags=["Marketplace - Cart"],
    )
    @action(detail=False, methods=["delete"])
    def remove_item(self, request):
        serializer = RemoveFromCartRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().remove_from_cart(request.user, serializer.validated_data["product_id"])
        return self.cart_response(result)

    @extend_schema(
        operation_id="cart_clear",
        summary="Clear cart",
        request=None,
        responses={200: OpenApiResponse(response=CartServiceOutputSerializer, description="Cart cleared")},
        tags=["Marketplace - Cart"],
    )
    @action(detail=False, methods=["post"])
    def clear(self, request):
        service = self.get_service()
        result = service.clear_cart(request.user)
        if not result.ok:
            return error_response(result)
        return self.cart_response(service.get_cart(request.user))

    @extend_schema(
        operation_id="cart_restore",
        summary="Restore a saved cart",
        description="""
        **What it receives:**
        - `items`: saved cart entries, e.g. a guest cart kept in browser storage

        Entries for products that no longer exist, or with a quantity that is not a
        positive integer, are dropped. The rest are merged into the user's cart.
        """,
        request=RestoreCartRequestSerializer,
        responses={
            200: OpenApiResponse(response=CartServiceOutputSerializer, description="Cart restored"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Items is not a list"),
        },
        tags=["Marketplace - Cart"],
    )
    @action(detail=False, methods=["post"])
    def restore(self, request):
        serializer = RestoreCartRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        return self.cart_response(self.get_service().restore_cart(request.user, serializer.validated_data["items"]))
