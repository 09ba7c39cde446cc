from typing import Dict
from uuid import uuid4
from decimal import Decimal
from ..db.session import get_session
from ..models.cart import Cart, CartItem
from ..models.product import Product
from .errors import NotFoundError, StockError, ValidationError
from .logging import log_event


class CartService:
    """Per-user cart operations backed by DB."""

    def __init__(self, session_factory=get_session):
        self._session_factory = session_factory

    @staticmethod
    def _find_cart(session, user_id: str):
        return session.query(Cart).filter(Cart.user_id == user_id).first()

    def _get_or_create(self, session, user_id: str) -> Cart:
        cart = self._find_cart(session, user_id)
        if cart is None:
            cart = Cart(id=str(uuid4()), user_id=user_id)
            session.add(cart)
            session.flush()
        return cart

    def _require_cart(self, session, user_id: str) -> Cart:
        cart = self._find_cart(session, user_id)
        if cart is None:
            raise NotFoundError("Cart not found")
        return cart

    @staticmethod
    def _to_dto(session, cart: Cart) -> Dict:
        items = []
        subtotal = Decimal("0")
        for it in cart.items:
            prod = session.get(Product, it.product_id)
            line = {
                "id": it.id,
                "productId": it.product_id,
                "variantId": it.variant_id,
                "quantity": it.quantity,
                "product": None,
                "variant": None,
            }
            if prod is not None:
                price = prod.effective_price
                subtotal += price * it.quantity
                line["product"] = {
                    "name": prod.name,
                    "slug": prod.slug,
                    "productCode": prod.product_code,
                    "price": float(prod.price),
                    "effectivePrice": float(price),
                    "images": prod.images or [],
                }
                variant = prod.find_variant(it.variant_id)
                line["variant"] = variant.to_dict() if variant else None
            items.append(line)
        return {"id": cart.id, "userId": cart.user_id, "items": items, "subtotal": float(subtotal)}

    def get_cart(self, *, user_id: str) -> Dict:
        with self._session_factory() as session:
            cart = self._get_or_create(session, user_id)
            return self._to_dto(session, cart)

    def add_item(self, *, user_id: str, product_id: str, variant_id: str, quantity: int = 1) -> Dict:
        qnty = int(quantity or 1)
        if qnty <= 0:
            raise ValidationError("quantity must be > 0")
        with self._session_factory() as session:
            prod = session.get(Product, product_id)
            if not prod:
                raise NotFoundError("Product not found")
            variant = prod.find_variant(variant_id)
            if variant is None:
                raise NotFoundError("Variant not found")

            cart = self._get_or_create(session, user_id)
            # lines are keyed by SKU; sku, lowercase sku and internal id all land on one line
            existing = next(
                (
                    it
                    for it in cart.items
                    if it.product_id == prod.id and prod.find_variant(it.variant_id) is variant
                ),
                None,
            )
            new_q = (existing.quantity if existing else 0) + qnty
            if new_q > variant.quantity:
                raise StockError(prod.name, available=variant.quantity)
            if existing:
                existing.quantity = new_q
                existing.variant_id = variant.sku
            else:
                cart.items.append(
                    CartItem(id=str(uuid4()), product_id=prod.id, variant_id=variant.sku, quantity=qnty)
                )
            session.flush()
            return self._to_dto(session, cart)

    def update_item(self, *, user_id: str, item_id: str, quantity: int) -> Dict:
        if quantity is None or int(quantity) < 1:
            raise ValidationError("Invalid quantity")
        with self._session_factory() as session:
            cart = self._require_cart(session, user_id)
            it = next((i for i in cart.items if i.id == item_id), None)
            if it is None:
                raise NotFoundError("Item not found")
            it.quantity = int(quantity)
            session.flush()
            return self._to_dto(session, cart)

    def remove_item(self, *, user_id: str, item_id: str) -> Dict:
        with self._session_factory() as session:
            cart = self._require_cart(session, user_id)
            cart.items = [i for i in cart.items if i.id != item_id]
            session.flush()
            return self._to_dto(session, cart)

    def clear(self, *, user_id: str) -> Dict:
        with self._session_factory() as session:
            cart = self._require_cart(session, user_id)
            self.clear_items(session, cart)
            return self._to_dto(session, cart)

    @staticmethod
    def clear_items(session, cart: Cart) -> None:
        """Empty ``cart`` inside an open session; the cart row itself is kept."""
        count = len(cart.items)
        cart.items = []
        session.flush()
        log_event("info", "cart.cleared", cart_id=cart.id, items=count)
