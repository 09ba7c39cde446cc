from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple
from uuid import uuid4
from decimal import Decimal
from sqlalchemy import func, or_
from ..db.session import get_session
from ..models.cart import Cart
from ..models.order import Order, ORDER_STATUSES
from ..models.product import Product
from ..utils.dto import to_order_dto
from ..utils.pagination import normalize_paging, page_count
from .cart_service import CartService
from .errors import (
    EmptyCartError,
    ForbiddenError,
    NoItemsError,
    NotFoundError,
    StockError,
    StorefrontError,
    ValidationError,
)
from .logging import log_event


# FAILED is only ever set by the payment webhook
ADMIN_STATUSES = tuple(s for s in ORDER_STATUSES if s != "FAILED")
REVENUE_STATUSES = ("PAID", "PROCESSING", "SHIPPED", "DELIVERED")


class OrderService:
    """Order creation and retrieval backed by DB."""

    def __init__(self, session_factory=get_session):
        self._session_factory = session_factory

    @staticmethod
    def _assemble(session, lines: Iterable[Tuple[str, str, int]]) -> Tuple[List[Dict], Decimal]:
        """Check every line against current product state and snapshot it.

        Raises before anything is written; stock is compared, not reserved.
        """
        snapshot = []
        total = Decimal("0")
        for product_id, variant_id, quantity in lines:
            prod = session.get(Product, product_id)
            if prod is None:
                raise NotFoundError(f"Product not found: {product_id}", extra={"productId": product_id})
            variant = prod.find_variant(variant_id)
            if variant is None:
                raise NotFoundError("Variant not found", extra={"productId": product_id, "variantId": variant_id})
            if quantity > variant.quantity:
                raise StockError(prod.name)
            price = prod.effective_price
            total += price * quantity
            snapshot.append(
                {
                    "productId": prod.id,
                    "productName": prod.name,
                    "productCode": prod.product_code,
                    "color": variant.color,
                    "size": variant.size,
                    "quantity": quantity,
                    "priceAtPurchase": float(price),
                }
            )
        return snapshot, total

    def create_order(self, req, *, user_id: Optional[str] = None) -> Dict:
        """Create order from request items, or from the user's stored cart when none are sent."""
        try:
            with self._session_factory() as session:
                cart = None
                if req.items:
                    lines = [(i.productId, i.variantId, i.quantity) for i in req.items]
                elif user_id:
                    cart = session.query(Cart).filter(Cart.user_id == user_id).first()
                    if cart is None or not cart.items:
                        raise EmptyCartError()
                    lines = [(it.product_id, it.variant_id, it.quantity) for it in cart.items]
                else:
                    raise NoItemsError()

                snapshot, total = self._assemble(session, lines)
                oid = str(uuid4())
                order = Order(
                    id=oid,
                    user_id=user_id,
                    email=str(req.email).lower(),
                    first_name=req.firstName,
                    last_name=req.lastName,
                    phone=req.phone,
                    shipping_address=req.shippingAddress.model_dump(exclude_none=True),
                    items=snapshot,
                    total_amount=total,
                    payment_method=req.paymentMethod,
                    status="PENDING",
                    payment_status="pending",
                )
                session.add(order)
                if cart is not None:
                    CartService.clear_items(session, cart)
                session.flush()
                log_event(
                    "info",
                    "order.created",
                    order_id=oid,
                    user_id=user_id,
                    items=len(snapshot),
                    total=float(total),
                    source="cart" if cart is not None else "request",
                )
                return to_order_dto(order)
        except StorefrontError as exc:
            log_event("warning", "order.rejected", user_id=user_id, error=exc.message)
            raise

    def list_for_user(self, user_id: str) -> List[Dict]:
        with self._session_factory() as session:
            rows = (
                session.query(Order)
                .filter(Order.user_id == user_id)
                .order_by(Order.created_at.desc(), Order.id)
                .all()
            )
            return [to_order_dto(o) for o in rows]

    def get_order(self, order_id: str) -> Dict:
        with self._session_factory() as session:
            o = session.get(Order, order_id)
            if not o:
                raise NotFoundError("Order not found")
            return to_order_dto(o)

    def get_for_user(self, order_id: str, user_id: str) -> Dict:
        order = self.get_order(order_id)
        if order["userId"] != user_id:
            raise ForbiddenError("Access denied")
        return order

    # --- back-office ---

    def list_orders(
        self,
        *,
        status: Optional[str] = None,
        payment_method: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        search: Optional[str] = None,
        order: str = "desc",
        page: int = 1,
        limit: int = 20,
    ) -> Dict:
        p, ps = normalize_paging(page, limit, default_size=20)
        with self._session_factory() as session:
            q = session.query(Order)
            if status:
                q = q.filter(Order.status == status.upper())
            if payment_method:
                q = q.filter(Order.payment_method == payment_method.upper())
            try:
                if start_date:
                    q = q.filter(Order.created_at >= datetime.fromisoformat(start_date))
                if end_date:
                    q = q.filter(Order.created_at <= datetime.fromisoformat(end_date))
            except ValueError as exc:
                raise ValidationError("Invalid date filter") from exc
            if search:
                q = q.filter(or_(Order.email.ilike(f"%{search}%"), Order.id == search))
            ordering = Order.created_at.asc() if order == "asc" else Order.created_at.desc()
            total = q.count()
            rows = q.order_by(ordering, Order.id).offset((p - 1) * ps).limit(ps).all()
            return {
                "items": [to_order_dto(o) for o in rows],
                "page": p,
                "limit": ps,
                "total": total,
                "pages": page_count(total, ps),
            }

    def update_status(self, order_id: str, status: str) -> Dict:
        new_status = (status or "").strip().upper()
        if new_status not in ADMIN_STATUSES:
            raise ValidationError(
                "Invalid status",
                extra={"message": f"Status must be one of: {', '.join(ADMIN_STATUSES)}"},
            )
        with self._session_factory() as session:
            o = session.get(Order, order_id)
            if not o:
                raise NotFoundError("Order not found")
            previous = o.status
            o.status = new_status
            session.flush()
            log_event("info", "order.status.updated", order_id=order_id, previous=previous, status=new_status)
            return to_order_dto(o)

    def stats_overview(self) -> Dict:
        with self._session_factory() as session:
            counts = dict(session.query(Order.status, func.count(Order.id)).group_by(Order.status).all())
            revenue = (
                session.query(func.coalesce(func.sum(Order.total_amount), 0))
                .filter(Order.status.in_(REVENUE_STATUSES))
                .scalar()
            )
            recent = session.query(Order).order_by(Order.created_at.desc(), Order.id).limit(10).all()
            return {
                "total": sum(counts.values()),
                "byStatus": {s.lower(): counts.get(s, 0) for s in ORDER_STATUSES},
                "totalRevenue": float(revenue or 0),
                "recentOrders": [
                    {
                        "id": o.id,
                        "email": o.email,
                        "totalAmount": float(o.total_amount),
                        "status": o.status,
                        "createdAt": o.created_at.isoformat() if o.created_at else None,
                    }
                    for o in recent
                ],
            }
