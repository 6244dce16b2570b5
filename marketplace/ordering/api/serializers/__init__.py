from .order_serializers import (
    BuyNowRequestSerializer,
    CheckoutRequestSerializer,
    OrderSerializer,
    OrderStatusUpdateSerializer,
)


__all__ = ["OrderSerializer", "CheckoutRequestSerializer", "BuyNowRequestSerializer", "OrderStatusUpdateSerializer"]
