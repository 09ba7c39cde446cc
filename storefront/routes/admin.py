"""管理後台訂單 API。"""

from __future__ import annotations

from flask import Blueprint, jsonify, request, session

from ..common.schemas import OrderStatusUpdate, parse_body
from ..common.utils.validators import parse_int
from .context import components, config, json_body, require_admin


admin_bp = Blueprint("storefront_admin", __name__, url_prefix="/api/admin")


def _orders():
    return components()["order_service"]


@admin_bp.post("/login")
def login_submit():
    payload = json_body()
    username = str(payload.get("username", "")).strip()
    password = str(payload.get("password", "")).strip()
    cfg = config()
    if username == cfg.admin_username and password == cfg.admin_password:
        session["storefront_admin"] = True
        return jsonify({"success": True})
    return jsonify({"success": False, "error": "帳號或密碼錯誤，請重新輸入。"}), 401


@admin_bp.post("/logout")
def logout():
    session.pop("storefront_admin", None)
    return jsonify({"success": True})


@admin_bp.get("/orders")
@require_admin
def list_orders():
    args = request.args
    result = _orders().list_orders(
        status=args.get("status"),
        payment_method=args.get("paymentMethod"),
        start_date=args.get("startDate"),
        end_date=args.get("endDate"),
        search=args.get("search"),
        order=args.get("order", "desc"),
        page=parse_int(args.get("page"), 1),
        limit=parse_int(args.get("limit"), 20),
    )
    return jsonify(
        {
            "success": True,
            "data": result["items"],
            "pagination": {
                "page": result["page"],
                "limit": result["limit"],
                "total": result["total"],
                "pages": result["pages"],
            },
        }
    )


@admin_bp.get("/orders/stats/overview")
@require_admin
def order_stats():
    return jsonify({"success": True, "data": _orders().stats_overview()})


@admin_bp.get("/orders/<order_id>")
@require_admin
def get_order(order_id: str):
    order = _orders().get_order(order_id)
    order["payments"] = components()["payment_service"].list_for_order(order_id)
    return jsonify({"success": True, "data": order})


@admin_bp.put("/orders/<order_id>/status")
@require_admin
def update_order_status(order_id: str):
    req = parse_body(OrderStatusUpdate, json_body())
    order = _orders().update_status(order_id, req.status)
    return jsonify({"success": True, "data": order, "message": "Order status updated successfully"})
