"""Encoding of the cart collection into the single persisted blob.

The blob is a JSON array of objects with the keys ``id``, ``name``,
``price``, ``stock``, ``image`` and ``quantity``. It is always written
wholesale.
"""
from __future__ import annotations

import json
import logging
from typing import Iterable

from storefront.store.cart_models import CartLine
from storefront.store.sanitize import sanitize_line

logger = logging.getLogger(__name__)


class CorruptCartError(ValueError):
    pass


def encode(lines: Iterable[CartLine]) -> str:
    return json.dumps(
        [
            {
                "id": line.id,
                "name": line.name,
                "price": line.unit_price,
                "stock": line.stock,
                "image": line.image,
                "quantity": line.quantity,
            }
            for line in lines
        ]
    )


def decode(blob: str) -> list[CartLine]:
    try:
        data = json.loads(blob)
    except (ValueError, RecursionError) as exc:
        raise CorruptCartError(f"cart blob is not valid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise CorruptCartError(f"cart blob must be an array, got {type(data).__name__}")

    lines: list[CartLine] = []
    seen: set[int] = set()
    for record in data:
        if not isinstance(record, dict):
            raise CorruptCartError(f"cart entry must be an object, got {type(record).__name__}")
        line = sanitize_line(record)
        if line.id in seen:
            raise CorruptCartError(f"duplicate cart entry for product {line.id}")
        seen.add(line.id)
        if line.quantity < 1:
            logger.debug("dropping persisted line %s with quantity %s", line.id, line.quantity)
            continue
        lines.append(line)
    return lines
