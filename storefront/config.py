"""Storefront 應用設定模組。"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .common.config import AppConfig, load_env


ENVIRONMENTS = {"development", "production", "testing"}


@dataclass
class StorefrontConfig:
    """封裝 storefront API 的設定值。"""

    secret_key: str
    environment: str
    admin_username: str
    admin_password: str
    frontend_url: str
    backend_url: str
    payhere_merchant_id: str
    payhere_merchant_secret: str
    supabase_jwt_secret: str
    supabase_jwt_audience: str
    app: AppConfig = field(default_factory=load_env)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def load(cls) -> "StorefrontConfig":
        """從環境變數（與 .env）建構設定。"""

        load_dotenv()
        environment = os.environ.get("STOREFRONT_ENV", "development").strip().lower()
        if environment not in ENVIRONMENTS:
            raise ValueError(f"STOREFRONT_ENV must be one of {sorted(ENVIRONMENTS)}, got {environment!r}")

        return cls(
            secret_key=os.environ.get("STOREFRONT_SECRET_KEY", "storefront-dev-secret"),
            environment=environment,
            admin_username=os.environ.get("STOREFRONT_ADMIN_USER", "admin"),
            admin_password=os.environ.get("STOREFRONT_ADMIN_PASS", "admin"),
            frontend_url=os.environ.get("FRONTEND_URL", "http://localhost:3000").rstrip("/"),
            backend_url=os.environ.get("BACKEND_URL", "http://localhost:5000").rstrip("/"),
            payhere_merchant_id=os.environ.get("PAYHERE_MERCHANT_ID", ""),
            payhere_merchant_secret=os.environ.get("PAYHERE_MERCHANT_SECRET", ""),
            supabase_jwt_secret=os.environ.get("SUPABASE_JWT_SECRET", ""),
            supabase_jwt_audience=os.environ.get("SUPABASE_JWT_AUDIENCE", "authenticated"),
            app=load_env(),
        )
