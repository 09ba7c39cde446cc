"""PayHere 金流、貨到付款與付款狀態 API。"""

from __future__ import annotations

import logging

from flask import Blueprint, jsonify, request

from ..common.schemas import CodRequest, InitiatePaymentRequest, PayHereNotification, parse_body
from ..common.services.logging import log_event
from .context import components, json_body


payment_bp = Blueprint("storefront_payment", __name__, url_prefix="/api/payment")

logger = logging.getLogger(__name__)


@payment_bp.post("/initiate")
def initiate_payment():
    req = parse_body(InitiatePaymentRequest, json_body())
    order = components()["order_service"].get_order(req.orderId)
    amount = req.amount if req.amount is not None else order["totalAmount"]
    payment_data = components()["payhere"].checkout_form(
        order_id=req.orderId,
        amount=amount,
        customer=req.customerDetails.model_dump(),
    )
    return jsonify({"success": True, "paymentData": payment_data})


@payment_bp.post("/webhook")
def payhere_webhook():
    notification = parse_body(PayHereNotification, request.form.to_dict())
    if not components()["payhere"].verify_notification(notification):
        log_event(
            "warning",
            "payment.webhook.rejected",
            order_id=notification.order_id,
            status_code=notification.status_code,
            ip=request.remote_addr,
        )
        return jsonify({"error": "Invalid signature"}), 400

    # past this point the gateway always gets OK so it does not redeliver
    try:
        components()["payment_service"].apply_gateway_notification(notification)
    except Exception as exc:
        logger.exception("webhook persistence failed for order %s", notification.order_id)
        log_event("error", "payment.webhook.persist_failed", order_id=notification.order_id, error=str(exc))
    return "OK", 200, {"Content-Type": "text/plain; charset=utf-8"}


@payment_bp.post("/cod")
def confirm_cod():
    req = parse_body(CodRequest, json_body())
    order = components()["payment_service"].confirm_cod(req.orderId)
    return jsonify({"success": True, "order": order})


@payment_bp.get("/<order_id>")
def payment_status(order_id: str):
    status = components()["payment_service"].get_status(order_id)
    return jsonify({"success": True, **status})
