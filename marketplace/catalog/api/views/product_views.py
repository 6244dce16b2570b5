import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from authentication.permissions import SellerRequired
from infrastructure.container import container
from marketplace.api.serializers import (
    ErrorResponseSerializer,
    KeywordListResponseSerializer,
    RoleDeniedResponseSerializer,
)
from marketplace.api.views.errors import error_response
from marketplace.catalog.api.serializers import (
    ProductCreateUpdateSerializer,
    ProductDetailSerializer,
    ProductListSerializer,
)
from marketplace.catalog.domain.services import CatalogService
from marketplace.filters import ProductFilter, cleaned_filters

logger = logging.getLogger(__name__)


class ProductViewSet(viewsets.ViewSet):
    """
    Product catalog: public browsing, seller-owned CRUD through CatalogService.
    """

    lookup_value_regex = "[0-9a-f-]{36}"

    def get_service(self) -> CatalogService:
        return container.catalog_service()

    def get_permissions(self):
        if self.action in ["create", "update", "partial_update", "destroy", "mine"]:
            return [SellerRequired()]
        return [AllowAny()]

    @extend_schema(
        operation_id="products_list",
        summary="List products with filters",
        description="""
        **What it receives:**
        - `search`: case-insensitive match on title, description or keywords
        - `keyword`: exact keyword (category)
        - `min_price` / `max_price`: inclusive price range

        **What it returns:**
        - Products, newest first
        """,
        parameters=[
            OpenApiParameter("search", str, description="Search text"),
            OpenApiParameter("keyword", str, description="Keyword (category)"),
            OpenApiParameter("min_price", float, description="Minimum price"),
            OpenApiParameter("max_price", float, description="Maximum price"),
        ],
        responses={
            200: ProductListSerializer(many=True),
            400: OpenApiResponse(description="Invalid filter value"),
        },
        tags=["Marketplace - Products"],
    )
    def list(self, request):
        filters, errors = cleaned_filters(ProductFilter, request.query_params)
        if errors:
            return Response(errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().list_products(filters)
        if not result.ok:
            return error_response(result)
        return Response(ProductListSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="products_retrieve",
        summary="Product details with related products",
        responses={
            200: ProductDetailSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Products"],
    )
    def retrieve(self, request, pk=None):
        service = self.get_service()
        result = service.get_product(pk)
        if not result.ok:
            return error_response(result)

        related_result = service.get_related_products(result.value)
        related = related_result.value if related_result.ok else []
        return Response(ProductDetailSerializer(result.value, context={"related": related}).data)

    @extend_schema(
        operation_id="products_create",
        summary="Create a product (seller)",
        request=ProductCreateUpdateSerializer,
        responses={
            201: ProductListSerializer,
            400: OpenApiResponse(description="Invalid product data"),
            403: OpenApiResponse(response=RoleDeniedResponseSerializer, description="Not a seller"),
        },
        tags=["Marketplace - Products"],
    )
    def create(self, request):
        serializer = ProductCreateUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().add_product(request.user, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(ProductListSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="products_update",
        summary="Update a product (owning seller)",
        description="Only the provided, non-empty fields are applied.",
        request=ProductCreateUpdateSerializer,
        responses={
            200: ProductListSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the owner"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Products"],
    )
    def partial_update(self, request, pk=None):
        serializer = ProductCreateUpdateSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().update_product(request.user, pk, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(ProductListSerializer(result.value).data)

    def update(self, request, pk=None):
        return self.partial_update(request, pk)

    @extend_schema(
        operation_id="products_delete",
        summary="Delete a product (owning seller)",
        responses={
            204: None,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the owner"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Products"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().delete_product(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="products_keywords",
        summary="All keywords in the catalog",
        responses={200: KeywordListResponseSerializer},
        tags=["Marketplace - Products"],
    )
    @action(detail=False, methods=["get"])
    def keywords(self, request):
        result = self.get_service().list_keywords()
        if not result.ok:
            return error_response(result)
        return Response({"keywords": result.value})

    @extend_schema(
        operation_id="products_mine",
        summary="Products of the calling seller",
        responses={200: ProductListSerializer(many=True)},
        tags=["Marketplace - Products"],
    )
    @action(detail=False, methods=["get"])
    def mine(self, request):
        result = self.get_service().seller_products(request.user)
        if not result.ok:
            return error_response(result)
        return Response(ProductListSerializer(result.value, many=True).data)
