"""
Prometheus Metrics

Defines the Prometheus metrics for authentication and role management.
Metrics are exposed at /api/auth/metrics for Prometheus scraping.
"""

from prometheus_client import Counter, Histogram

# ===== Login Metrics =====

login_total = Counter("auth_login_total", "Total login attempts", ["status"])
"""
Total login attempts counter.
Labels: status (success/failed)

Example:
    login_total.labels(status='success').inc()
"""

login_failed = Counter("auth_login_failed", "Failed login attempts", ["reason"])
"""
Failed login attempts counter.
Labels: reason (missing_fields, invalid_credentials, account_disabled)
"""

login_duration = Histogram(
    "auth_login_duration_seconds", "Login request duration in seconds", buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0]
)


# ===== Registration Metrics =====

registration_total = Counter("auth_registration_total", "Total registration attempts", ["status"])

registration_failed = Counter("auth_registration_failed", "Failed registration attempts", ["reason"])
"""
Failed registration attempts counter.
Labels: reason (missing_fields, email_exists, weak_password, internal_error)
"""


# ===== Session Metrics =====

logout_total = Counter("auth_logout_total", "Total logout requests", ["status"])

jwt_generation_total = Counter("auth_jwt_generation_total", "Total JWT tokens generated", ["token_type"])


# ===== Role Metrics =====

role_changes_total = Counter("auth_role_changes_total", "Role grants and revocations", ["role", "action"])
"""
Role changes counter.
Labels: role (client/seller/admin), action (grant/revoke)
"""


# ===== Helper Functions =====


def record_login_attempt(success: bool, reason: str = None):
    """
    Record login attempt metrics.

    Args:
        success: Whether login was successful
        reason: Failure reason (if failed)
    """
    status = "success" if success else "failed"
    login_total.labels(status=status).inc()

    if not success and reason:
        login_failed.labels(reason=reason).inc()


def record_registration_attempt(success: bool, reason: str = None):
    status = "success" if success else "failed"
    registration_total.labels(status=status).inc()

    if not success and reason:
        registration_failed.labels(reason=reason).inc()


def record_token_pair():
    jwt_generation_total.labels(token_type="access").inc()
    jwt_generation_total.labels(token_type="refresh").inc()


def record_role_change(role: str, action: str):
    role_changes_total.labels(role=role, action=action).inc()
