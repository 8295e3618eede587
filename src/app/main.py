"""Definition of FastAPI based web service."""

import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.routing import Mount, Route, WebSocketRoute

import constants
import metrics
import version
from app import routers
from configuration import configuration
from log import get_logger
from quota.quota_service import QuotaServiceHolder

logger = get_logger(__name__)

logger.info("Initializing app")

# each Uvicorn worker is a separate process that needs to load configuration
if not configuration.is_loaded():
    configuration.load_configuration(
        os.environ[constants.CONFIGURATION_PATH_ENV_VARIABLE]
    )

service_name = configuration.configuration.name


# running on FastAPI startup
@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """
    Initialize app resources.

    FastAPI lifespan context: connects quota service to its storage before
    serving requests and closes the connection on shutdown.
    """
    QuotaServiceHolder().load(configuration.quota_configuration)
    logger.info("App startup complete")

    yield

    QuotaServiceHolder().unload()
    logger.info("App shutdown complete")


app = FastAPI(
    title=f"{service_name} service - OpenAPI",
    summary=f"{service_name} service API specification.",
    description=f"{service_name} service API specification.",
    version=version.__version__,
    license_info={
        "name": "Apache 2.0",
        "url": "https://www.apache.org/licenses/LICENSE-2.0.html",
    },
    servers=[
        {"url": "http://localhost:8080/", "description": "Locally running service"}
    ],
    lifespan=lifespan,
)

cors = configuration.service_configuration.cors

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.allow_origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)


# scraped periodically by Prometheus
REST_METRICS_IGNORED_PATHS = frozenset(("/metrics",))


@app.middleware("")
async def rest_api_metrics(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Count calls and measure durations of the service's own routes."""
    path = request.url.path
    if path not in app_routes_paths or path in REST_METRICS_IGNORED_PATHS:
        return await call_next(request)

    logger.debug("Measuring API request for path: %s", path)
    with metrics.response_duration_seconds.labels(path).time():
        response = await call_next(request)
    metrics.rest_api_calls_total.labels(path, response.status_code).inc()
    return response


logger.info("Including routers")
routers.include_routers(app)

app_routes_paths = frozenset(
    route.path
    for route in app.routes
    if isinstance(route, (Mount, Route, WebSocketRoute))
)
