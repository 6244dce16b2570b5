from __future__ import annotations

import logging
from typing import Iterable

from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import BasePermission

from utils.rbac import ROLE_ADMIN, ROLE_CLIENT, ROLE_SELLER, dashboard_route_for, resolve_role

logger = logging.getLogger(__name__)


class RoleRequired(BasePermission):
    """Base permission that enforces required roles after DB re-validation.

    JWT claims are never trusted for access decisions. A caller holding the
    wrong role gets a 403 whose body says where their own dashboard lives.
    """

    required_roles: Iterable[str] = ()

    def has_permission(self, request, view) -> bool:
        user = getattr(request, "user", None)
        if user is None or not getattr(user, "is_authenticated", False):
            return False

        required = tuple(self.required_roles)
        if not required:
            return True

        role = resolve_role(user)
        if role in required:
            return True

        logger.warning(f"RBAC denial: user_id={user.pk} role={role} required={required} path={request.path}")
        raise PermissionDenied(
            {
                "detail": "You do not have access to this page.",
                "role": role,
                "redirect_to": dashboard_route_for(role),
            }
        )

    def has_object_permission(self, request, view, obj) -> bool:
        return self.has_permission(request, view)


class ClientRequired(RoleRequired):
    required_roles = (ROLE_CLIENT,)


class SellerRequired(RoleRequired):
    required_roles = (ROLE_SELLER,)


class AdminRequired(RoleRequired):
    required_roles = (ROLE_ADMIN,)
