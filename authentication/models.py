from authentication.domain.models.role import UserRole
from authentication.domain.models.seller import Seller
from authentication.domain.models.user import CustomUser


__all__ = [
    "CustomUser",
    "UserRole",
    "Seller",
]
