"""
Result objects for the authentication service layer.

Dataclasses returned by service methods instead of mixed tuples or dicts.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LoginResult:
    """Result of a login attempt."""

    success: bool
    user: Optional[Any] = None  # CustomUser instance
    role: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    error: Optional[str] = None
    message: Optional[str] = None


@dataclass
class RegisterResult:
    """Result of a registration attempt. A successful registration is also logged in."""

    success: bool
    user: Optional[Any] = None  # CustomUser instance
    role: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    error: Optional[str] = None
    errors: Optional[Dict[str, Any]] = None  # Field-level errors
    message: Optional[str] = None


@dataclass
class Result:
    """Generic result for simple operations."""

    success: bool
    message: str
    data: Optional[Dict[str, Any]] = field(default_factory=dict)
    error: Optional[str] = None
