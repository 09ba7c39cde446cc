from datetime import datetime
from typing import Any, Dict, Optional


def _money(value) -> float:
    return float(value or 0)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def to_product_dto(row: Any) -> Dict:
    images = getattr(row, "images", None) or []
    primary = next((img.get("url") for img in images if img.get("isPrimary")), None)
    if primary is None:
        primary = images[0].get("url") if images else ""
    hover = next((img.get("url") for img in images if img.get("isHover")), None) or primary
    sale_price = getattr(row, "sale_price", None)
    return {
        "id": getattr(row, "id", None),
        "name": getattr(row, "name", None),
        "slug": getattr(row, "slug", None),
        "productCode": getattr(row, "product_code", None),
        "description": getattr(row, "description", None),
        "price": _money(getattr(row, "price", 0)),
        "salePrice": _money(sale_price) if sale_price is not None else None,
        "effectivePrice": _money(row.effective_price),
        "isOnSale": bool(row.is_on_sale),
        "category": getattr(row, "category_id", None),
        "images": images,
        "primaryImage": primary,
        "hoverImage": hover,
        "isNewArrival": bool(getattr(row, "is_new_arrival", False)),
        "isFeatured": bool(getattr(row, "is_featured", False)),
        "soldCount": getattr(row, "sold_count", 0) or 0,
        "variants": [v.to_dict() for v in getattr(row, "variants", None) or []],
        "createdAt": _iso(getattr(row, "created_at", None)),
    }


def to_order_dto(row: Any) -> Dict:
    return {
        "id": row.id,
        "orderNumber": row.order_number,
        "userId": row.user_id,
        "email": row.email,
        "firstName": row.first_name,
        "lastName": row.last_name,
        "phone": row.phone,
        "shippingAddress": row.shipping_address or {},
        "status": row.status,
        "paymentMethod": row.payment_method,
        "paymentStatus": row.payment_status,
        "paymentId": row.payment_id,
        "transactionId": row.transaction_id,
        "trackingNumber": row.tracking_number,
        "items": list(row.items or []),
        "subtotal": _money(row.subtotal),
        "totalAmount": _money(row.total_amount),
        "createdAt": _iso(row.created_at),
        "updatedAt": _iso(row.updated_at),
    }


def to_payment_dto(row: Any) -> Dict:
    return {
        "id": row.id,
        "orderId": row.order_id,
        "paymentId": row.payment_id,
        "paymentMethod": row.payment_method,
        "amount": _money(row.amount),
        "currency": row.currency,
        "status": row.status,
        "transactionId": row.transaction_id,
        "paymentData": row.payment_data or {},
        "failureReason": row.failure_reason,
        "createdAt": _iso(row.created_at),
    }
