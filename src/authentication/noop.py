"""Manage authentication flow for FastAPI endpoints with no-op auth."""

import logging

from fastapi import Request

from constants import (
    DEFAULT_USER_NAME,
    DEFAULT_USER_UID,
    NO_USER_TOKEN,
    DEFAULT_VIRTUAL_PATH,
)
from authentication.interface import AuthInterface, AuthTuple

logger = logging.getLogger(__name__)


class NoopAuthDependency(AuthInterface):  # pylint: disable=too-few-public-methods
    """No-op AuthDependency class that trusts user ID provided by the caller."""

    def __init__(self, virtual_path: str = DEFAULT_VIRTUAL_PATH) -> None:
        """Initialize dependency guarding endpoints under given virtual path."""
        self.virtual_path = virtual_path

    async def __call__(self, request: Request) -> AuthTuple:
        """Extract user identity from FastAPI request.

        Args:
            request: The FastAPI request object.

        Returns:
            The user's UID, username and empty token. User ID is read from
            `user_id` query parameter and falls back to the default UID.
        """
        logger.warning(
            "No-op authentication dependency is being used. "
            "The service is running in insecure mode intended solely for development purposes"
        )
        # try to extract user ID from request
        user_id = request.query_params.get("user_id", DEFAULT_USER_UID)
        logger.debug("Retrieved user ID: %s", user_id)
        return user_id, DEFAULT_USER_NAME, NO_USER_TOKEN
