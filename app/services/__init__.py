"""비즈니스 로직 서비스."""

from app.services.cart_service import CartService
from app.services.checkout_service import CheckoutService
from app.services.product_service import ProductService
from app.services.user_service import UserService

__all__ = ["CartService", "CheckoutService", "ProductService", "UserService"]
