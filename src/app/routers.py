"""REST API routers."""

from fastapi import FastAPI

from app.endpoints import (
    health,
    metrics,
    quota,
)


def include_routers(app: FastAPI) -> None:
    """Include FastAPI routers for different endpoints.

    Args:
        app: The `FastAPI` app instance.
    """
    app.include_router(quota.router, prefix="/v1")

    # probes and metrics are not versioned
    app.include_router(health.router)
    app.include_router(metrics.router)
