from decimal import Decimal, InvalidOperation
from typing import Optional


def parse_int(value, default: Optional[int] = None) -> Optional[int]:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def parse_bool(value) -> Optional[bool]:
    if value is None or value == "":
        return None
    return str(value).strip().lower() in {"1", "true", "yes"}


def parse_decimal(value) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"invalid number: {value}")
