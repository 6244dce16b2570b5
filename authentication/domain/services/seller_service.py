"""
SellerService - Seller directory and role management.

Looks up and maintains the seller directory and lets admins grant or revoke
roles. Granting the seller role also makes sure a directory row exists.
"""

import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction

from authentication.domain.models import Seller, UserRole
from authentication.infra.observability.metrics import record_role_change
from utils.rbac import ROLE_SELLER

from .results import Result


User = get_user_model()
logger = logging.getLogger(__name__)


class SellerService:
    """
    Seller directory and role service.

    Handles seller lookups, upserts and admin role grants/revocations.
    """

    def fetch_seller_by_id(self, seller_id) -> Optional[Seller]:
        """Seller directory row for ``seller_id``; lookup errors are logged and yield None."""
        try:
            return Seller.objects.get(pk=seller_id)
        except Seller.DoesNotExist:
            logger.info(f"No seller directory row for {seller_id}")
            return None
        except (ValidationError, ValueError) as e:
            logger.error(f"Invalid seller id {seller_id}: {e}")
            return None

    def upsert_seller(self, seller_id, name: str, contact_email: str) -> bool:
        """Insert or update the directory row keyed by the seller's user id."""
        try:
            _, created = Seller.objects.update_or_create(
                user_id=seller_id,
                defaults={"name": name, "contact_email": contact_email},
            )
            logger.info(f"Seller {seller_id} {'created' if created else 'updated'}")
            return True
        except Exception as e:
            logger.error(f"Failed to upsert seller {seller_id}: {e}", exc_info=True)
            return False

    @transaction.atomic
    def grant_role(self, user, role: str) -> Result:
        """
        Grant ``role`` to ``user``. Granting twice is a no-op.

        Args:
            user: CustomUser instance receiving the role
            role: One of UserRole.ROLE_CHOICES
        """
        if role not in dict(UserRole.ROLE_CHOICES):
            return Result(success=False, message="Unknown role", error=f"Unknown role '{role}'")

        _, created = UserRole.objects.get_or_create(user=user, role=role)
        if role == ROLE_SELLER:
            if not self.upsert_seller(user.pk, user.get_display_name(), user.email):
                transaction.set_rollback(True)
                return Result(success=False, message="Could not create seller profile", error="seller_upsert_failed")

        if created:
            record_role_change(role, "grant")
            logger.info(f"Granted role {role} to user {user.pk}")

        return Result(
            success=True,
            message=f"Role {role} granted" if created else f"User already has role {role}",
            data={"user_id": str(user.pk), "role": role},
        )

    @transaction.atomic
    def revoke_role(self, user, role: str) -> Result:
        deleted, _ = UserRole.objects.filter(user=user, role=role).delete()
        if not deleted:
            return Result(success=False, message="Role not held", error=f"User does not have role '{role}'")

        record_role_change(role, "revoke")
        logger.info(f"Revoked role {role} from user {user.pk}")
        return Result(success=True, message=f"Role {role} revoked", data={"user_id": str(user.pk), "role": role})
