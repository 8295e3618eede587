"""Unit tests."""

from configuration import configuration  # noqa: F401

config_dict = {
    "name": "test",
    "service": {
        "host": "localhost",
        "port": 8080,
        "workers": 1,
        "color_log": True,
        "access_log": True,
    },
    "authentication": {
        "module": "noop",
    },
    "quota": {
        "sqlite": {
            "db_path": ":memory:",
        },
        "daily_allowance": 100,
        "scheduler": {
            "enabled": False,
        },
    },
}

# Configuration must be initialized before importing endpoints, since
# get_auth_dependency() uses it during import time
configuration.init_from_dict(config_dict)
