from .product_serializers import ProductCreateUpdateSerializer, ProductDetailSerializer, ProductListSerializer


__all__ = ["ProductListSerializer", "ProductDetailSerializer", "ProductCreateUpdateSerializer"]
