"""The cart: an in-memory collection of lines mirrored to key-value storage.

There is exactly one writer per storage key. The blob is read once when the
store is created and rewritten after every mutation, so two processes sharing
a key simply overwrite each other (last write wins).
"""
from __future__ import annotations

import logging
from typing import Any

from storefront.store import cart_codec
from storefront.store.cart_models import CartLine, ProductInfo
from storefront.store.sanitize import ensure_int, ensure_number
from storefront.store.storage import CorruptBlobError, KeyValueStorage, StorageError

logger = logging.getLogger(__name__)

DEFAULT_CART_KEY = "cart"


class CartStore:
    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_CART_KEY) -> None:
        self.storage = storage
        self.key = key
        self._lines = dict[int, CartLine]()
        self._load()

    def _load(self) -> None:
        try:
            blob = self.storage.get(self.key)
        except CorruptBlobError as exc:
            logger.warning("discarding corrupt cart %r: %s", self.key, exc)
            self._erase()
            return
        except StorageError as exc:
            logger.warning("could not read cart %r, starting empty: %s", self.key, exc)
            return
        if blob is None:
            return

        try:
            lines = cart_codec.decode(blob)
        except cart_codec.CorruptCartError as exc:
            logger.warning("discarding corrupt cart %r: %s", self.key, exc)
            self._erase()
            return

        self._lines = {line.id: line for line in lines}

    def _persist(self) -> None:
        try:
            self.storage.set(self.key, cart_codec.encode(self._lines.values()))
        except StorageError as exc:
            logger.warning("could not persist cart %r: %s", self.key, exc)

    def _erase(self) -> None:
        try:
            self.storage.remove(self.key)
        except StorageError as exc:
            logger.warning("could not erase cart %r: %s", self.key, exc)

    @property
    def items(self) -> list[CartLine]:
        return list(self._lines.values())

    def get(self, id: int) -> CartLine | None:
        return self._lines.get(id)

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def total_price(self) -> float:
        return sum((line.unit_price * line.quantity for line in self._lines.values()), 0.0)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def add_item(self, item: ProductInfo, quantity: Any = 1) -> None:
        """Add ``quantity`` of a product.

        Numeric fields are coerced permissively, so junk becomes ``0``. A
        quantity that ends up below 1 adds nothing. Adding to a product that
        is already in the cart increments its quantity without checking
        stock; only :meth:`set_quantity` clamps.
        """
        id = ensure_int(item.id)
        qty = ensure_int(quantity)
        if qty < 1:
            logger.debug("ignoring add of product %s with quantity %r", id, quantity)
            return

        existing = self._lines.get(id)
        if existing is not None:
            existing.quantity += qty
        else:
            self._lines[id] = CartLine(
                id=id,
                name=str(item.name or ""),
                unit_price=float(ensure_number(item.unit_price)),
                stock=ensure_int(item.stock),
                quantity=qty,
                image=item.image if isinstance(item.image, str) else None,
            )
        logger.debug("added %s x product %s", qty, id)
        self._persist()

    def remove_item(self, id: int) -> None:
        if self._lines.pop(id, None) is None:
            return
        logger.debug("removed product %s", id)
        self._persist()

    def set_quantity(self, id: int, quantity: int) -> None:
        if quantity <= 0:
            self.remove_item(id)
            return

        line = self._lines.get(id)
        if line is None:
            return

        clamped = min(quantity, line.stock)
        if clamped <= 0:
            # out of stock lines cannot stay in the cart
            self.remove_item(id)
            return

        line.quantity = clamped
        self._persist()

    def clear(self) -> None:
        self._lines.clear()
        self._erase()

    def order_lines(self) -> list[dict[str, int]]:
        return [{"productId": line.id, "quantity": line.quantity} for line in self._lines.values()]
