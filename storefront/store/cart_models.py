from dataclasses import dataclass


@dataclass(slots=True)
class ProductInfo:
    id: int
    name: str
    unit_price: float
    stock: int
    image: str | None = None


@dataclass(slots=True)
class CartLine:
    id: int
    name: str
    unit_price: float
    stock: int
    quantity: int
    image: str | None = None

    @property
    def subtotal(self) -> float:
        return self.unit_price * self.quantity
