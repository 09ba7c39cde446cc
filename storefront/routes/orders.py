"""訂單建立與訂單查詢 API。"""

from __future__ import annotations

from flask import Blueprint, g, jsonify

from ..common.schemas import ORDER_REQUIRED_FIELDS, CreateOrderRequest, missing_fields, parse_body
from ..common.services.errors import ValidationError
from .context import components, json_body, optional_auth, require_auth


orders_bp = Blueprint("storefront_orders", __name__, url_prefix="/api/orders")


@orders_bp.post("/create")
@optional_auth
def create_order():
    payload = json_body()
    missing = missing_fields(payload, ORDER_REQUIRED_FIELDS)
    if missing:
        raise ValidationError("Missing required fields", fields=missing)
    req = parse_body(CreateOrderRequest, payload)

    order = components()["order_service"].create_order(req, user_id=g.user_id)
    return jsonify({"success": True, "message": "Order created successfully", "data": order}), 201


@orders_bp.get("/user")
@require_auth
def user_orders():
    orders = components()["order_service"].list_for_user(g.user_id)
    return jsonify({"success": True, "data": orders})


@orders_bp.get("/<order_id>")
@require_auth
def get_order(order_id: str):
    order = components()["order_service"].get_for_user(order_id, g.user_id)
    return jsonify({"success": True, "data": order})
