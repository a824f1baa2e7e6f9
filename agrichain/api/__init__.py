# agrichain/api/__init__.py
from typing import Optional

from fastapi import FastAPI

from agrichain.api.routers import (
    carts,
    farmers,
    health,
    orders,
    products,
    schemes,
    stats,
    traces,
    transactions,
    users,
)
from agrichain.data.collections import CollectionStore
from agrichain.data.seed import bootstrap
from agrichain.services.registry import build_services
from agrichain.utils.network import NetworkSimulator


def create_app(
    store: Optional[CollectionStore] = None,
    network: Optional[NetworkSimulator] = None,
) -> FastAPI:
    app = FastAPI(
        title="AgriChain Data Service",
        version="1.0.0",
    )

    # magazyn inicjalizowany raz, przed obsluga pierwszego requestu
    store = store or bootstrap()
    network = network or NetworkSimulator.from_settings()
    app.state.services = build_services(store, network)

    # Include routers
    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(farmers.router)
    app.include_router(transactions.router)
    app.include_router(schemes.router)
    app.include_router(traces.router)
    app.include_router(stats.router)
    app.include_router(carts.router)
    app.include_router(orders.router)
    app.include_router(users.router)

    return app
