import logging
from typing import Iterable, List


# Canonical role names
ROLE_CLIENT = "client"
ROLE_SELLER = "seller"
ROLE_ADMIN = "admin"

# Highest priority first
ROLE_PRIORITY = (ROLE_ADMIN, ROLE_SELLER, ROLE_CLIENT)

DASHBOARD_ROUTES = {
    ROLE_CLIENT: "/",
    ROLE_SELLER: "/seller-dashboard",
    ROLE_ADMIN: "/admin-dashboard",
}

logger = logging.getLogger(__name__)


def pick_role(roles: Iterable[str]) -> str:
    """Collapse a set of granted roles into one: admin > seller > client."""
    granted = set(roles)
    for role in ROLE_PRIORITY:
        if role in granted:
            return role
    return ROLE_CLIENT


def fetch_roles(user) -> List[str]:
    """Roles persisted for the user, read from the database on every call."""
    from authentication.models import UserRole

    if not getattr(user, "is_authenticated", False):
        return []
    return list(UserRole.objects.filter(user_id=user.pk).values_list("role", flat=True))


def resolve_role(user) -> str:
    """Effective role of a user, falling back to client when nothing is stored."""
    try:
        roles = fetch_roles(user)
    except Exception as e:
        logger.error("Error fetching roles for user %s: %s", getattr(user, "pk", None), e)
        return ROLE_CLIENT

    if not roles:
        logger.debug("No role found for user %s, defaulting to client", getattr(user, "pk", None))
        return ROLE_CLIENT
    return pick_role(roles)


def dashboard_route_for(role: str) -> str:
    return DASHBOARD_ROUTES.get(role, DASHBOARD_ROUTES[ROLE_CLIENT])


def has_role(user, role: str) -> bool:
    return resolve_role(user) == role


def is_admin(user) -> bool:
    return has_role(user, ROLE_ADMIN)


def is_seller(user) -> bool:
    return has_role(user, ROLE_SELLER)


def is_client(user) -> bool:
    return has_role(user, ROLE_CLIENT)
