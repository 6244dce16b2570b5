from .cart_serializers import (
    AddToCartRequestSerializer,
    CartLineSerializer,
    CartServiceOutputSerializer,
    RemoveFromCartRequestSerializer,
    RestoreCartRequestSerializer,
    UpdateCartRequestSerializer,
)


__all__ = [
    "CartLineSerializer",
    "CartServiceOutputSerializer",
    "AddToCartRequestSerializer",
    "UpdateCartRequestSerializer",
    "RemoveFromCartRequestSerializer",
    "RestoreCartRequestSerializer",
]
