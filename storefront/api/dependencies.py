import asyncio

from fastapi import Request

from storefront.checkout import OrderApiClient
from storefront.store.cart_store import CartStore


def get_cart_store(request: Request) -> CartStore:
    return request.app.state.cart_store


def get_cart_lock(request: Request) -> asyncio.Lock:
    return request.app.state.cart_lock


def get_order_client(request: Request) -> OrderApiClient:
    return request.app.state.order_client
