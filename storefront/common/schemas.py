"""
Request schemas for the storefront API.

Each pydantic model mirrors one JSON (or form) body accepted by a route;
field names follow the wire format the storefront frontend sends.
"""

from decimal import Decimal
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .models.order import PAYMENT_METHODS
from .services.errors import ValidationError


class _Body(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)


# ---------------------------------
# Orders
# ---------------------------------

class ShippingAddress(_Body):
    addressLine1: str = Field(..., min_length=1)
    addressLine2: Optional[str] = None
    city: str = Field(..., min_length=1)
    postalCode: str = Field(..., min_length=1)
    country: Optional[str] = None


class OrderItemRequest(_Body):
    productId: str = Field(..., min_length=1)
    variantId: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)


class CreateOrderRequest(_Body):
    email: EmailStr
    firstName: str = Field(..., min_length=1)
    lastName: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    shippingAddress: ShippingAddress
    items: Optional[List[OrderItemRequest]] = None
    paymentMethod: Optional[Literal[PAYMENT_METHODS]] = None

    @field_validator("paymentMethod", mode="before")
    @classmethod
    def _upper_method(cls, v):
        return v.strip().upper() if isinstance(v, str) else v


ORDER_REQUIRED_FIELDS = ("email", "firstName", "lastName", "phone", "shippingAddress")


class OrderStatusUpdate(_Body):
    status: str = Field(..., min_length=1)


# ---------------------------------
# Cart
# ---------------------------------

class CartAddRequest(_Body):
    productId: str = Field(..., min_length=1)
    variantId: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1)


class CartUpdateRequest(_Body):
    quantity: int = Field(..., ge=1)


# ---------------------------------
# Payment
# ---------------------------------

class PayHereNotification(_Body):
    """Form fields posted by PayHere to the notify URL."""

    merchant_id: str = ""
    order_id: str = ""
    payment_id: str = ""
    payhere_amount: str = ""
    payhere_currency: str = ""
    status_code: str = ""
    md5sig: str = ""
    status_message: Optional[str] = None
    method: Optional[str] = None


class CodRequest(_Body):
    orderId: str = Field(..., min_length=1)


class CustomerDetails(_Body):
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None


class InitiatePaymentRequest(_Body):
    orderId: str = Field(..., min_length=1)
    amount: Optional[Decimal] = Field(None, ge=0)
    customerDetails: CustomerDetails = Field(default_factory=CustomerDetails)


def missing_fields(payload: Dict[str, Any], names) -> List[str]:
    return [n for n in names if payload.get(n) in (None, "", {}, [])]


def parse_body(model, payload: Any):
    """Validate ``payload`` against ``model``; raise the API ``ValidationError`` on failure."""
    try:
        return model.model_validate(payload or {})
    except PydanticValidationError as exc:
        fields = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        raise ValidationError("Validation failed", fields=fields) from exc
