"""Hand the cart over to the backend Order API.

The Order API is external. A failed submission leaves the cart untouched so
the customer can retry; only a successful one clears it. Callers hold the
cart lock across :func:`place_order` so the cart cannot change while the
order is in flight.
"""
from __future__ import annotations

import logging
from typing import Annotated, Any, Literal

import httpx
from pydantic import BaseModel, StringConstraints

from storefront.store.cart_store import CartStore

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_MESSAGE = "Checkout failed. Please try again."
EMPTY_CART_MESSAGE = "Your cart is empty"
ORDERS_ENDPOINT = "/orders"

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
PaymentMethod = Literal["credit_card", "paypal", "cash_on_delivery"]


class CheckoutError(Exception):
    def __init__(self, message: str = DEFAULT_FAILURE_MESSAGE, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class EmptyCartError(CheckoutError):
    def __init__(self) -> None:
        super().__init__(EMPTY_CART_MESSAGE)


class CheckoutDetails(BaseModel):
    customer_name: RequiredText
    customer_email: RequiredText
    phone_number: RequiredText
    shipping_address: RequiredText
    payment_method: PaymentMethod = "cash_on_delivery"


class OrderApiClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def create_order(
        self,
        details: CheckoutDetails,
        lines: list[dict[str, int]],
        cookies: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        payload = {
            "customerName": details.customer_name,
            "customerEmail": details.customer_email,
            "phoneNumber": details.phone_number,
            "shippingAddress": details.shipping_address,
            "paymentMethod": details.payment_method,
            "items": lines,
        }
        headers = {}
        if cookies:
            headers["Cookie"] = "; ".join(f"{name}={value}" for name, value in cookies.items())
        try:
            response = await self.client.post(ORDERS_ENDPOINT, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("order submission failed: %s", exc)
            raise CheckoutError() from exc

        if response.is_error:
            message = _backend_message(response) or DEFAULT_FAILURE_MESSAGE
            logger.warning("order API rejected order (%s): %s", response.status_code, message)
            raise CheckoutError(message, status_code=response.status_code)

        order = _json_body(response)
        if not isinstance(order, dict) or order.get("id") is None:
            logger.warning("order API returned no order id")
            raise CheckoutError(status_code=response.status_code)
        return order


def _json_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _backend_message(response: httpx.Response) -> str | None:
    body = _json_body(response)
    if isinstance(body, dict):
        message = body.get("message")
        # validation failures come back as a list of messages
        if isinstance(message, list):
            message = "; ".join(str(m) for m in message)
        if isinstance(message, str) and message:
            return message
    return None


async def place_order(
    store: CartStore,
    client: OrderApiClient,
    details: CheckoutDetails,
    cookies: dict[str, str] | None = None,
) -> dict[str, Any]:
    if len(store) == 0:
        raise EmptyCartError()

    order = await client.create_order(details, store.order_lines(), cookies=cookies)
    logger.info("placed order %s with %s items", order["id"], store.item_count)
    store.clear()
    return order
