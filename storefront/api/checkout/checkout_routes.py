import asyncio
from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from storefront.api.dependencies import get_cart_lock, get_cart_store, get_order_client
from storefront.checkout import CheckoutError, EmptyCartError, OrderApiClient, place_order
from storefront.store.cart_store import CartStore

from .checkout_contracts import CheckoutRequest, OrderResponse

checkout_router = APIRouter(prefix="/checkout")


@checkout_router.post(
    "/",
    status_code=HTTPStatus.CREATED,
    responses={
        HTTPStatus.CREATED: {
            "description": "Order placed and cart cleared",
        },
        HTTPStatus.BAD_REQUEST: {
            "description": "Failed to place order as the cart is empty",
        },
        HTTPStatus.BAD_GATEWAY: {
            "description": "Order API rejected the order, cart left unchanged",
        },
    },
)
async def post_checkout(
    info: CheckoutRequest,
    request: Request,
    response: Response,
    store: Annotated[CartStore, Depends(get_cart_store)],
    client: Annotated[OrderApiClient, Depends(get_order_client)],
    lock: Annotated[asyncio.Lock, Depends(get_cart_lock)],
) -> OrderResponse:
    try:
        async with lock:
            order = await place_order(store, client, info.as_checkout_details(), cookies=dict(request.cookies))
    except EmptyCartError as exc:
        raise HTTPException(HTTPStatus.BAD_REQUEST, exc.message) from exc
    except CheckoutError as exc:
        raise HTTPException(HTTPStatus.BAD_GATEWAY, exc.message) from exc

    response.headers["location"] = f"/customer/orders/{order['id']}"

    return OrderResponse.from_order(order)
