"""Permissive conversions applied to anything entering the cart.

Forms and persisted blobs can hand us strings, ``None`` or junk where numbers
are expected. Nothing here raises: unusable values collapse to ``0``.
"""
from __future__ import annotations

import math
import re
from typing import Any, Mapping

from storefront.store.cart_models import CartLine

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def ensure_number(value: Any) -> float:
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        try:
            return value if math.isfinite(value) else 0
        except OverflowError:
            # ints beyond float range
            return 0
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if match is None:
            return 0
        parsed = float(match.group(1))
        return parsed if math.isfinite(parsed) else 0
    return 0


def ensure_int(value: Any) -> int:
    return int(ensure_number(value))


def sanitize_line(record: Mapping[str, Any]) -> CartLine:
    image = record.get("image")
    return CartLine(
        id=ensure_int(record.get("id")),
        name=str(record.get("name") or ""),
        unit_price=float(ensure_number(record.get("price"))),
        stock=ensure_int(record.get("stock")),
        quantity=ensure_int(record.get("quantity")),
        image=image if isinstance(image, str) else None,
    )


def format_price(value: Any) -> str:
    # Taka, comma-grouped, always two decimals
    return f"৳{ensure_number(value):,.2f}"
