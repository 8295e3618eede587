"""Unit tests for AuthenticationConfiguration model."""

import pytest

from pydantic import ValidationError

from constants import AUTH_MOD_NOOP, AUTH_MOD_NOOP_WITH_TOKEN
from models.config import AuthenticationConfiguration, Configuration


def test_authentication_configuration_default() -> None:
    """Test the default authentication module."""
    auth_config = AuthenticationConfiguration()
    assert auth_config.module == AUTH_MOD_NOOP


@pytest.mark.parametrize("module", [AUTH_MOD_NOOP, AUTH_MOD_NOOP_WITH_TOKEN])
def test_authentication_configuration_supported_modules(module: str) -> None:
    """Test that all supported modules are accepted."""
    assert AuthenticationConfiguration(module=module).module == module


def test_authentication_configuration_unsupported_module() -> None:
    """Test that unknown authentication module is refused."""
    with pytest.raises(
        ValidationError,
        match="Unsupported authentication module 'k8s'. "
        "Supported modules: noop, noop-with-token",
    ):
        AuthenticationConfiguration(module="k8s")


def test_authentication_configuration_in_config() -> None:
    """Test authentication section of global configuration."""
    cfg = Configuration(
        name="test",
        authentication={"module": AUTH_MOD_NOOP_WITH_TOKEN},
    )
    assert cfg.authentication.module == AUTH_MOD_NOOP_WITH_TOKEN
