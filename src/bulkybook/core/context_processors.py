"""Context processors for BulkyBook core."""

from .roles import ORDER_MANAGER_ROLES, ROLE_ADMIN


def roles_context(request):
    """Add role flags to templates."""
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        return {"is_admin": False, "is_order_manager": False}

    return {
        "is_admin": user.is_superuser or user.has_role(ROLE_ADMIN),
        "is_order_manager": user.is_superuser or user.has_role(*ORDER_MANAGER_ROLES),
    }
