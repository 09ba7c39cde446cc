"""驗證 Supabase 簽發的 access token。"""

from __future__ import annotations

from typing import Optional

import jwt

from ..common.services.errors import AuthError


class SupabaseTokenVerifier:
    """以專案 JWT secret 驗證 HS256 token，取出使用者 id（sub）。"""

    def __init__(self, jwt_secret: str, audience: Optional[str] = "authenticated") -> None:
        self._secret = jwt_secret
        self._audience = audience

    def verify(self, token: str) -> str:
        if not token:
            raise AuthError("No token provided")
        if not self._secret:
            raise AuthError("Token verification failed")
        options = {"verify_aud": bool(self._audience)}
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=["HS256"],
                audience=self._audience or None,
                options=options,
            )
        except jwt.InvalidTokenError as exc:
            raise AuthError("Invalid or expired token") from exc
        user_id = claims.get("sub")
        if not user_id:
            raise AuthError("Invalid or expired token")
        return str(user_id)

    @staticmethod
    def bearer_token(header_value: Optional[str]) -> Optional[str]:
        """從 Authorization header 取出 Bearer token；格式不符時回傳 None。"""
        if not header_value or not header_value.startswith("Bearer "):
            return None
        return header_value.split(" ", 1)[1].strip() or None
