"""Session helpers for the shopping cart badge."""

SESSION_CART = "SessionShoppingCart"

# Copies of one product a cart line may hold
MAX_CART_COUNT = 1000


def refresh_cart_count(request) -> int:
    """Store the number of cart lines of the current user in the session."""
    count = request.unit_of_work.shopping_cart.count_for_user(request.user)
    request.session[SESSION_CART] = count
    return count


def clear_cart_count(request) -> None:
    request.session.pop(SESSION_CART, None)
