import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from storefront.api.cart.cart_routes import cart_router
from storefront.api.checkout.checkout_routes import checkout_router
from storefront.checkout import OrderApiClient
from storefront.config import Settings, load_settings
from storefront.store.cart_store import CartStore
from storefront.store.storage import KeyValueStorage, build_storage

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    storage: KeyValueStorage | None = None,
    order_client: OrderApiClient | None = None,
) -> FastAPI:
    settings = settings or load_settings()
    storage = storage if storage is not None else build_storage(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.order_client.aclose()

    app = FastAPI(title="Storefront Cart", lifespan=lifespan)
    app.state.cart_store = CartStore(storage, key=settings.cart_key)
    app.state.cart_lock = asyncio.Lock()
    app.state.order_client = order_client or OrderApiClient(
        settings.api_base_url,
        timeout=settings.api_timeout,
    )
    logger.info(
        "cart %r loaded from %s storage with %s lines",
        settings.cart_key,
        settings.storage_backend,
        len(app.state.cart_store),
    )

    app.include_router(cart_router)
    app.include_router(checkout_router)
    return app


logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()
