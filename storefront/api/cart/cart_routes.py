import asyncio
from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from storefront.api.dependencies import get_cart_lock, get_cart_store
from storefront.store.cart_store import CartStore

from .cart_contracts import (
    AddItemRequest,
    CartResponse,
    SetQuantityRequest,
)

cart_router = APIRouter(prefix="/cart")

Store = Annotated[CartStore, Depends(get_cart_store)]
Lock = Annotated[asyncio.Lock, Depends(get_cart_lock)]


@cart_router.get("/")
async def get_cart(store: Store, lock: Lock) -> CartResponse:
    async with lock:
        return CartResponse.from_store(store)


@cart_router.post(
    "/items",
    status_code=HTTPStatus.CREATED,
)
async def post_item(info: AddItemRequest, store: Store, lock: Lock) -> CartResponse:
    async with lock:
        store.add_item(info.as_product_info(), info.quantity)
        return CartResponse.from_store(store)


@cart_router.put(
    "/items/{id}",
    responses={
        HTTPStatus.OK: {
            "description": "Successfully updated quantity, or removed the line",
        },
        HTTPStatus.NOT_FOUND: {
            "description": "Failed to update quantity as the product is not in the cart",
        },
    },
)
async def put_item_quantity(id: int, info: SetQuantityRequest, store: Store, lock: Lock) -> CartResponse:
    async with lock:
        if store.get(id) is None:
            raise HTTPException(
                HTTPStatus.NOT_FOUND,
                f"Requested resource /cart/items/{id} was not found",
            )

        store.set_quantity(id, info.quantity)
        return CartResponse.from_store(store)


@cart_router.delete("/items/{id}")
async def delete_item(id: int, store: Store, lock: Lock) -> CartResponse:
    async with lock:
        store.remove_item(id)
        return CartResponse.from_store(store)


@cart_router.delete("/")
async def clear_cart(store: Store, lock: Lock) -> CartResponse:
    async with lock:
        store.clear()
        return CartResponse.from_store(store)
