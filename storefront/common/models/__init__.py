from .base import Base
from .category import Category
from .product import Product, ProductVariant
from .cart import Cart, CartItem
from .order import Order, ORDER_STATUSES, PAYMENT_METHODS
from .payment import Payment

__all__ = [
    "Base",
    "Category",
    "Product",
    "ProductVariant",
    "Cart",
    "CartItem",
    "Order",
    "ORDER_STATUSES",
    "PAYMENT_METHODS",
    "Payment",
]
