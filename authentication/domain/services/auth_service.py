"""
AuthService - Core Authentication Business Logic.

Keeps account, session and role lookups out of the views so they can be
tested and reused. Sessions are JWT pairs; logout blacklists the refresh token.
"""

import logging

from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.db import transaction
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.api.serializers.jwt_serializers import CustomRefreshToken
from authentication.domain.models import UserRole
from authentication.infra.observability.metrics import (
    login_duration,
    logout_total,
    record_login_attempt,
    record_registration_attempt,
    record_token_pair,
)
from utils.logging_utils import mask_value
from utils.rbac import ROLE_CLIENT, dashboard_route_for, resolve_role

from .results import LoginResult, RegisterResult, Result


User = get_user_model()
logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service encapsulating all auth business logic.

    Handles registration, login, logout and role lookups.
    """

    def login(self, email: str, password: str) -> LoginResult:
        """
        Authenticate user with email/password.

        Business Logic:
        1. Validate input
        2. Verify credentials (unknown email and wrong password look the same)
        3. Resolve the role from the database
        4. Generate JWT tokens

        Returns:
            LoginResult with authentication status and tokens
        """
        with login_duration.time():
            if not isinstance(email, str) or not email or not password:
                record_login_attempt(False, reason="missing_fields")
                return LoginResult(success=False, error="Email and password are required.")

            user = authenticate(username=email.strip().lower(), password=password)
            if user is None:
                logger.info(f"Failed login for {mask_value(email)}")
                record_login_attempt(False, reason="invalid_credentials")
                return LoginResult(success=False, error="Invalid credentials.")

            if not user.is_active:
                record_login_attempt(False, reason="account_disabled")
                return LoginResult(success=False, error="Invalid credentials.")

            result = self._generate_login_tokens(user)
            record_login_attempt(result.success, reason=None if result.success else "token_error")
            return result

    def _generate_login_tokens(self, user, message: str = "Login successful") -> LoginResult:
        """Generate JWT tokens for a successful login."""
        try:
            refresh = CustomRefreshToken.for_user(user)
            record_token_pair()
            return LoginResult(
                success=True,
                user=user,
                role=refresh["role"],
                access_token=str(refresh.access_token),
                refresh_token=str(refresh),
                message=message,
            )
        except Exception as e:
            logger.exception(f"Token generation failed for user {user.pk}: {e}")
            return LoginResult(success=False, error="Failed to generate authentication tokens.")

    def register(self, name: str, email: str, password: str) -> RegisterResult:
        """
        Register a new user and log them in.

        Business Logic:
        1. Validate email uniqueness and password strength
        2. Create the user with the client role
        3. Generate JWT tokens so the user is logged in straight away

        Nothing is created when any step fails.
        """
        email = (email or "").strip().lower()
        if not email or not password:
            record_registration_attempt(False, reason="missing_fields")
            return RegisterResult(success=False, error="Email and password are required.")

        if User.objects.filter(email__iexact=email).exists():
            record_registration_attempt(False, reason="email_exists")
            return RegisterResult(
                success=False,
                error="A user with this email already exists.",
                errors={"email": ["A user with this email already exists."]},
            )

        try:
            validate_password(password)
        except ValidationError as e:
            record_registration_attempt(False, reason="weak_password")
            return RegisterResult(success=False, error=" ".join(e.messages), errors={"password": e.messages})

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    username=self._unique_username(email),
                    email=email,
                    password=password,
                    name=(name or "").strip(),
                )
                UserRole.objects.create(user=user, role=ROLE_CLIENT)
        except Exception as e:
            logger.exception(f"Registration error for {mask_value(email)}: {e}")
            record_registration_attempt(False, reason="internal_error")
            return RegisterResult(success=False, error="Registration failed. Please try again.")

        record_registration_attempt(True)
        logger.info(f"Registered user {user.pk} with role {ROLE_CLIENT}")

        tokens = self._generate_login_tokens(user, message="Registration successful")
        return RegisterResult(
            success=True,
            user=user,
            role=ROLE_CLIENT,
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            message="Registration successful",
        )

    def _unique_username(self, email: str) -> str:
        base = email.split("@")[0][:140] or "user"
        username = base
        suffix = 1
        while User.objects.filter(username=username).exists():
            suffix += 1
            username = f"{base}{suffix}"
        return username

    def logout(self, refresh_token: str) -> Result:
        """Blacklist the refresh token. An unusable token still counts as logged out."""
        if not refresh_token:
            logout_total.labels(status="no_token").inc()
            return Result(success=True, message="Logged out")

        try:
            RefreshToken(refresh_token).blacklist()
            logout_total.labels(status="success").inc()
        except TokenError as e:
            logger.warning(f"Logout with unusable refresh token: {e}")
            logout_total.labels(status="invalid_token").inc()

        return Result(success=True, message="Logged out")

    def get_user_info(self, user) -> dict:
        role = resolve_role(user)
        return {
            "id": str(user.pk),
            "email": user.email,
            "name": user.get_display_name(),
            "role": role,
            "dashboard": dashboard_route_for(role),
        }

    def refresh_user_role(self, user) -> dict:
        """Re-read the role from the database, ignoring whatever the token claims."""
        info = self.get_user_info(user)
        logger.info(f"Refreshed role for user {user.pk}: {info['role']}")
        return info
