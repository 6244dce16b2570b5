from rest_framework_simplejwt.tokens import RefreshToken

from utils.rbac import ROLE_ADMIN, ROLE_SELLER, resolve_role


def _add_role_claims(token, user):
    role = resolve_role(user)
    token["role"] = role
    token["is_seller"] = role == ROLE_SELLER
    token["is_admin"] = role == ROLE_ADMIN
    token["name"] = user.get_display_name()
    return token


class CustomRefreshToken(RefreshToken):
    """Refresh token carrying role claims.

    Claims are informational for clients; permission checks re-read the role
    from the database.
    """

    @classmethod
    def for_user(cls, user):
        return _add_role_claims(super().for_user(user), user)
