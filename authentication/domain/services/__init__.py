"""
Business logic services for authentication.

Services encapsulate business rules for accounts, sessions, roles and the
seller directory.
"""

from .auth_service import AuthService
from .results import LoginResult, RegisterResult, Result
from .seller_service import SellerService


__all__ = [
    "AuthService",
    "SellerService",
    "LoginResult",
    "RegisterResult",
    "Result",
]
