"""外部服務（金流、身分驗證）封裝入口。"""

from .payhere import PayHereGateway
from .supabase_auth import SupabaseTokenVerifier

__all__ = [
    "PayHereGateway",
    "SupabaseTokenVerifier",
]
