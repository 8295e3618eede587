"""Uvicorn runner serving the quota REST API."""

import logging
import uvicorn

from log import get_logger
from models.config import ServiceConfiguration

logger = get_logger(__name__)


def start_uvicorn(configuration: ServiceConfiguration, verbose: bool = False) -> None:
    """Start Uvicorn workers serving `app.main:app`.

    Every worker process loads the configuration on its own, the path is
    passed through the environment by the caller.
    """
    logger.info("Starting Uvicorn on %s:%d", configuration.host, configuration.port)

    tls = configuration.tls_config
    # unset TLS options are passed as None, which keeps plain HTTP
    uvicorn.run(
        "app.main:app",
        host=configuration.host,
        port=configuration.port,
        workers=configuration.workers,
        log_level=logging.DEBUG if verbose else logging.INFO,
        ssl_keyfile=tls.tls_key_path,
        ssl_certfile=tls.tls_certificate_path,
        ssl_keyfile_password=str(tls.tls_key_password or ""),
        use_colors=configuration.color_log,
        access_log=configuration.access_log,
    )
