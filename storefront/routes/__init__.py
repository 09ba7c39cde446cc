"""Storefront API blueprints."""

from .admin import admin_bp
from .cart import cart_bp
from .catalog import catalog_bp
from .orders import orders_bp
from .payment import payment_bp

__all__ = ["admin_bp", "cart_bp", "catalog_bp", "orders_bp", "payment_bp"]
