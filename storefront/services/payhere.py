"""PayHere 金流簽章與結帳表單。"""

from __future__ import annotations

import hashlib
import hmac
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional


def _md5_upper(value: str) -> str:
    return hashlib.md5(value.encode("utf-8")).hexdigest().upper()


def format_amount(amount) -> str:
    """PayHere 要求金額固定兩位小數。"""
    return str(Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class PayHereGateway:
    """以商店 merchant id / secret 計算 PayHere 簽章。"""

    def __init__(
        self,
        merchant_id: str,
        merchant_secret: str,
        *,
        currency: str = "LKR",
        frontend_url: str = "",
        backend_url: str = "",
    ) -> None:
        self.merchant_id = merchant_id
        self._merchant_secret = merchant_secret
        self.currency = currency
        self._frontend_url = frontend_url.rstrip("/")
        self._backend_url = backend_url.rstrip("/")

    def _secret_digest(self) -> str:
        return _md5_upper(self._merchant_secret)

    def checkout_hash(self, order_id: str, amount, currency: Optional[str] = None) -> str:
        return _md5_upper(
            self.merchant_id + order_id + format_amount(amount) + (currency or self.currency) + self._secret_digest()
        )

    def notification_signature(
        self,
        merchant_id: str,
        order_id: str,
        amount: str,
        currency: str,
        status_code: str,
    ) -> str:
        # amount is hashed exactly as posted by the gateway, not re-formatted
        return _md5_upper(merchant_id + order_id + amount + currency + status_code + self._secret_digest())

    def verify_notification(self, notification) -> bool:
        """檢查通知中的 md5sig 是否與重新計算的簽章一致。"""
        if not self._merchant_secret or not notification.md5sig:
            return False
        expected = self.notification_signature(
            notification.merchant_id,
            notification.order_id,
            notification.payhere_amount,
            notification.payhere_currency,
            notification.status_code,
        )
        return hmac.compare_digest(expected.encode("utf-8"), notification.md5sig.encode("utf-8"))

    def checkout_form(self, *, order_id: str, amount, customer: Dict[str, Optional[str]]) -> Dict[str, str]:
        """產生前端送往 PayHere checkout 的表單欄位。"""
        return {
            "merchant_id": self.merchant_id,
            "return_url": f"{self._frontend_url}/payment/success",
            "cancel_url": f"{self._frontend_url}/payment/cancel",
            "notify_url": f"{self._backend_url}/api/payment/webhook",
            "order_id": order_id,
            "items": "Order Items",
            "currency": self.currency,
            "amount": format_amount(amount),
            "first_name": customer.get("firstName") or "",
            "last_name": customer.get("lastName") or "",
            "email": customer.get("email") or "",
            "phone": customer.get("phone") or "",
            "address": customer.get("address") or "",
            "city": customer.get("city") or "",
            "country": "Sri Lanka",
            "hash": self.checkout_hash(order_id, amount),
        }
