"""Context processors for the store."""

from .cart import SESSION_CART, refresh_cart_count


def cart_context(request):
    """Add the cart line count to templates."""
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        return {"cart_count": 0}

    if SESSION_CART not in request.session and hasattr(request, "unit_of_work"):
        refresh_cart_count(request)
    return {"cart_count": request.session.get(SESSION_CART, 0)}
