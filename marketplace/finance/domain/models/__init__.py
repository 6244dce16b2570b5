from .finance import Payment, StorageCost


__all__ = [
    "Payment",
    "StorageCost",
]
