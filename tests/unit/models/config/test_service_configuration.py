"""Unit tests for ServiceConfiguration, TLSConfiguration and CORSConfiguration models."""

from pathlib import Path

import pytest

from pydantic import ValidationError

from models.config import CORSConfiguration, ServiceConfiguration, TLSConfiguration


def test_service_configuration_constructor() -> None:
    """
    Verify that the ServiceConfiguration constructor sets default
    values for all fields.
    """
    s = ServiceConfiguration()
    assert s is not None

    assert s.host == "localhost"
    assert s.port == 8080
    assert s.workers == 1
    assert s.color_log is True
    assert s.access_log is True
    assert s.tls_config == TLSConfiguration()
    assert s.cors == CORSConfiguration()


def test_service_configuration_port_value() -> None:
    """Test the ServiceConfiguration port value validation."""
    with pytest.raises(ValidationError, match="Input should be greater than 0"):
        ServiceConfiguration(port=-1)

    with pytest.raises(ValueError, match="Port value should be less than 65536"):
        ServiceConfiguration(port=100000)


def test_service_configuration_workers_value() -> None:
    """Test the ServiceConfiguration workers value validation."""
    with pytest.raises(ValidationError, match="Input should be greater than 0"):
        ServiceConfiguration(workers=0)


def test_service_configuration_unknown_field() -> None:
    """Test that unknown fields are refused."""
    with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
        ServiceConfiguration(auth_enabled=True)


def test_tls_configuration(tmp_path: Path) -> None:
    """Test the TLS configuration pointing to existing files."""
    certificate = tmp_path / "server.crt"
    key = tmp_path / "server.key"
    password = tmp_path / "password"
    for path in (certificate, key, password):
        path.write_text("x", encoding="utf-8")

    cfg = ServiceConfiguration(
        tls_config=TLSConfiguration(
            tls_certificate_path=certificate,
            tls_key_path=key,
            tls_key_password=password,
        )
    )
    assert cfg.tls_config.tls_certificate_path == certificate
    assert cfg.tls_config.tls_key_path == key
    assert cfg.tls_config.tls_key_password == password


@pytest.mark.parametrize("broken_path", [Path("this-is-wrong"), Path("tests/")])
def test_tls_configuration_wrong_path(broken_path: Path) -> None:
    """Test the TLS configuration loading when some path is broken."""
    with pytest.raises(ValueError, match="Path does not point to a file"):
        TLSConfiguration(tls_certificate_path=broken_path)


def test_cors_default_configuration() -> None:
    """Test the default CORS configuration."""
    cfg = CORSConfiguration()
    assert cfg.allow_origins == ["*"]
    assert cfg.allow_credentials is False
    assert cfg.allow_methods == ["*"]
    assert cfg.allow_headers == ["*"]


def test_cors_credentials_with_explicit_origins() -> None:
    """Test that credentials are allowed with explicit origins."""
    cfg = CORSConfiguration(
        allow_origins=["https://quota.example.com"],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
    )
    assert cfg.allow_credentials is True
    assert cfg.allow_methods == ["GET", "POST"]


def test_cors_improper_configuration() -> None:
    """Test that credentials can not be combined with wildcard origin."""
    with pytest.raises(ValueError, match="allow_credentials can not be set to true"):
        CORSConfiguration(allow_origins=["*"], allow_credentials=True)
