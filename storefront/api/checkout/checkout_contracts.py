from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from storefront.checkout import CheckoutDetails, PaymentMethod, RequiredText


class CheckoutRequest(BaseModel):
    customer_name: RequiredText
    customer_email: RequiredText
    phone_number: RequiredText
    shipping_address: RequiredText
    payment_method: PaymentMethod = "cash_on_delivery"

    model_config = ConfigDict(extra="forbid")

    def as_checkout_details(self) -> CheckoutDetails:
        return CheckoutDetails(
            customer_name=self.customer_name,
            customer_email=self.customer_email,
            phone_number=self.phone_number,
            shipping_address=self.shipping_address,
            payment_method=self.payment_method,
        )


class OrderResponse(BaseModel):
    id: int | str
    order: dict[str, Any]

    @staticmethod
    def from_order(order: dict[str, Any]) -> OrderResponse:
        return OrderResponse(id=order["id"], order=order)
