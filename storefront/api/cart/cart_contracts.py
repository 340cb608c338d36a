from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from typing import List

from storefront.store.cart_models import CartLine, ProductInfo
from storefront.store.cart_store import CartStore
from storefront.store.sanitize import format_price

LooseNumber = float | str | None


class CartLineResponse(BaseModel):
    id: int
    name: str
    price: float
    stock: int
    image: str | None
    quantity: int
    subtotal: float

    @staticmethod
    def from_line(line: CartLine) -> CartLineResponse:
        return CartLineResponse(
            id=line.id,
            name=line.name,
            price=line.unit_price,
            stock=line.stock,
            image=line.image,
            quantity=line.quantity,
            subtotal=line.subtotal,
        )


class CartResponse(BaseModel):
    items: List[CartLineResponse]
    total_price: float
    item_count: int
    total_display: str

    @staticmethod
    def from_store(store: CartStore) -> CartResponse:
        total = store.total_price
        return CartResponse(
            items=[CartLineResponse.from_line(line) for line in store.items],
            total_price=total,
            item_count=store.item_count,
            total_display=format_price(total),
        )


class AddItemRequest(BaseModel):
    id: int
    name: str = ""
    price: LooseNumber = None
    stock: LooseNumber = None
    image: str | None = None
    quantity: LooseNumber = 1

    model_config = ConfigDict(extra="forbid")

    def as_product_info(self) -> ProductInfo:
        return ProductInfo(
            id=self.id,
            name=self.name,
            unit_price=self.price,
            stock=self.stock,
            image=self.image,
        )


class SetQuantityRequest(BaseModel):
    quantity: int = Field(description="Values of 0 or below remove the line")

    model_config = ConfigDict(extra="forbid")
