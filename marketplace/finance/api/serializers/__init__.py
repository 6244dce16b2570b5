from .finance_serializers import (
    PaymentCreateSerializer,
    PaymentSerializer,
    StorageCostCreateSerializer,
    StorageCostSerializer,
    StorageCostUpdateSerializer,
)


__all__ = [
    "PaymentSerializer",
    "PaymentCreateSerializer",
    "StorageCostSerializer",
    "StorageCostCreateSerializer",
    "StorageCostUpdateSerializer",
]
