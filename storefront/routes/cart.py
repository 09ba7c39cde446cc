"""登入使用者的購物車 API。"""

from __future__ import annotations

from flask import Blueprint, g, jsonify

from ..common.schemas import CartAddRequest, CartUpdateRequest, parse_body
from ..common.services.errors import ValidationError
from .context import components, json_body, require_auth


cart_bp = Blueprint("storefront_cart", __name__, url_prefix="/api/cart")


def _carts():
    return components()["cart_service"]


@cart_bp.get("")
@require_auth
def get_cart():
    return jsonify({"success": True, "data": _carts().get_cart(user_id=g.user_id)})


@cart_bp.post("/add")
@require_auth
def add_item():
    req = parse_body(CartAddRequest, json_body())
    cart = _carts().add_item(
        user_id=g.user_id,
        product_id=req.productId,
        variant_id=req.variantId,
        quantity=req.quantity,
    )
    return jsonify({"success": True, "message": "Item added to cart", "data": cart})


@cart_bp.put("/update/<item_id>")
@require_auth
def update_item(item_id: str):
    try:
        req = parse_body(CartUpdateRequest, json_body())
    except ValidationError as exc:
        raise ValidationError("Invalid quantity") from exc
    cart = _carts().update_item(user_id=g.user_id, item_id=item_id, quantity=req.quantity)
    return jsonify({"success": True, "message": "Cart updated", "data": cart})


@cart_bp.delete("/remove/<item_id>")
@require_auth
def remove_item(item_id: str):
    cart = _carts().remove_item(user_id=g.user_id, item_id=item_id)
    return jsonify({"success": True, "message": "Item removed from cart", "data": cart})


@cart_bp.delete("/clear")
@require_auth
def clear_cart():
    cart = _carts().clear(user_id=g.user_id)
    return jsonify({"success": True, "message": "Cart cleared", "data": cart})
