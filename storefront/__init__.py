"""Clothing storefront backend: catalog, cart, checkout and payments."""

from .app import create_app

__all__ = ["create_app"]
