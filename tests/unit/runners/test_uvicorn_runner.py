"""Unit tests for the Uvicorn runner implementation."""

from pathlib import Path

from pytest_mock import MockerFixture

from models.config import ServiceConfiguration, TLSConfiguration
from runners.uvicorn import start_uvicorn


def test_start_uvicorn(mocker: MockerFixture) -> None:
    """Test the function to start Uvicorn server using de-facto default configuration."""
    configuration = ServiceConfiguration(host="localhost", port=8080, workers=1)

    # don't start real Uvicorn server
    mocked_run = mocker.patch("uvicorn.run")
    start_uvicorn(configuration)
    mocked_run.assert_called_once_with(
        "app.main:app",
        host="localhost",
        port=8080,
        workers=1,
        log_level=20,
        ssl_certfile=None,
        ssl_keyfile=None,
        ssl_keyfile_password="",
        use_colors=True,
        access_log=True,
    )


def test_start_uvicorn_verbose(mocker: MockerFixture) -> None:
    """Test that verbose service logs on debug level."""
    configuration = ServiceConfiguration(host="localhost", port=8080, workers=1)

    mocked_run = mocker.patch("uvicorn.run")
    start_uvicorn(configuration, verbose=True)

    assert mocked_run.call_args.kwargs["log_level"] == 10


def test_start_uvicorn_without_colors_and_access_log(mocker: MockerFixture) -> None:
    """Test that logging options are taken from configuration."""
    configuration = ServiceConfiguration(
        host="x.y.com", port=1234, workers=10, color_log=False, access_log=False
    )

    mocked_run = mocker.patch("uvicorn.run")
    start_uvicorn(configuration)

    kwargs = mocked_run.call_args.kwargs
    assert kwargs["host"] == "x.y.com"
    assert kwargs["port"] == 1234
    assert kwargs["workers"] == 10
    assert kwargs["use_colors"] is False
    assert kwargs["access_log"] is False


def test_start_uvicorn_tls_configuration(mocker: MockerFixture, tmp_path: Path) -> None:
    """Test the function to start Uvicorn server using custom TLS configuration."""
    certificate = tmp_path / "server.crt"
    key = tmp_path / "server.key"
    password = tmp_path / "password"
    for path in (certificate, key, password):
        path.write_text("x", encoding="utf-8")

    configuration = ServiceConfiguration(
        tls_config=TLSConfiguration(
            tls_certificate_path=certificate,
            tls_key_path=key,
            tls_key_password=password,
        )
    )

    mocked_run = mocker.patch("uvicorn.run")
    start_uvicorn(configuration)

    kwargs = mocked_run.call_args.kwargs
    assert kwargs["ssl_certfile"] == certificate
    assert kwargs["ssl_keyfile"] == key
    # password is passed as path converted to string
    assert kwargs["ssl_keyfile_password"] == str(password)
