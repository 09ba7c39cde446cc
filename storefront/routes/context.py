"""各 blueprint 共用的元件存取與身分驗證裝飾器。"""

from __future__ import annotations

from functools import wraps
from typing import Any, Dict

from flask import current_app, g, jsonify, request, session

from ..common.services.errors import AuthError
from ..common.services.logging import log_event


def components() -> Dict[str, Any]:
    return current_app.extensions["storefront_components"]


def config():
    return current_app.config["STOREFRONT_CONFIG"]


def _resolve_user(required: bool):
    verifier = components()["token_verifier"]
    header = request.headers.get("Authorization")
    if not header:
        if required:
            raise AuthError("No token provided")
        return None
    token = verifier.bearer_token(header)
    try:
        if token is None:
            raise AuthError("No token provided")
        return verifier.verify(token)
    except AuthError as exc:
        log_event("warning", "auth.token.rejected", path=request.path, ip=request.remote_addr, error=exc.message)
        raise


def optional_auth(view):
    """沒有 Authorization header 時視為訪客；header 無效則回 401。"""

    @wraps(view)
    def wrapper(*args, **kwargs):
        g.user_id = _resolve_user(required=False)
        return view(*args, **kwargs)

    return wrapper


def require_auth(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        g.user_id = _resolve_user(required=True)
        return view(*args, **kwargs)

    return wrapper


def is_admin() -> bool:
    return bool(session.get("storefront_admin"))


def require_admin(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not is_admin():
            return jsonify({"success": False, "error": "需要管理者登入才能操作此功能。"}), 401
        return view(*args, **kwargs)

    return wrapper


def json_body() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}
