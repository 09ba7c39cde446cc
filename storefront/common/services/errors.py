"""Exceptions raised by the storefront services.

Each carries the HTTP status the routes answer with; ``extra`` is merged
into the JSON error body.
"""

from typing import Any, Dict, Optional


class StorefrontError(Exception):
    status_code = 500

    def __init__(self, message: str, *, extra: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra or {}

    def to_dict(self) -> Dict[str, Any]:
        body = {"success": False, "error": self.message}
        body.update(self.extra)
        return body


class ValidationError(StorefrontError, ValueError):
    status_code = 400

    def __init__(self, message: str, *, fields=None, extra=None) -> None:
        extra = dict(extra or {})
        if fields:
            extra["fields"] = fields
        super().__init__(message, extra=extra)
        self.fields = fields or []


class NoItemsError(ValidationError):
    def __init__(self) -> None:
        super().__init__("No items provided")


class EmptyCartError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Cart is empty")


class StockError(ValidationError):
    def __init__(self, product_name: str, available: Optional[int] = None) -> None:
        extra = {"product": product_name}
        if available is not None:
            extra["available"] = available
        super().__init__(f"Insufficient stock for {product_name}", extra=extra)
        self.product_name = product_name
        self.available = available


class NotFoundError(StorefrontError, LookupError):
    status_code = 404


class ForbiddenError(StorefrontError):
    status_code = 403


class AuthError(StorefrontError):
    status_code = 401
