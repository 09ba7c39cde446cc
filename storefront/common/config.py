import os
from dataclasses import dataclass


@dataclass
class AppConfig:
    database_url: str
    log_level: str
    currency: str


def validate_currency(value) -> str:
    v = (value or "LKR").strip().upper()
    if len(v) != 3 or not v.isalpha():
        raise ValueError("Invalid currency code: expected ISO4217 length 3")
    return v


def load_env() -> AppConfig:
    database_url = os.getenv("DATABASE_URL", "sqlite:///data/storefront.db")
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    currency = validate_currency(os.getenv("CURRENCY"))
    return AppConfig(
        database_url=database_url,
        log_level=log_level,
        currency=currency,
    )
