"""Unit tests checking ability to dump configuration."""

import json

from models.config import (
    Configuration,
    CORSConfiguration,
    PostgreSQLDatabaseConfiguration,
    QuotaConfiguration,
    ServiceConfiguration,
)


def test_dump_configuration(tmp_path) -> None:
    """
    Test that the Configuration object can be serialized to a JSON file and
    that the resulting file contains all expected sections and values.
    """
    cfg = Configuration(
        name="test_name",
        service=ServiceConfiguration(
            cors=CORSConfiguration(
                allow_origins=["foo_origin", "bar_origin"],
                allow_credentials=False,
            ),
        ),
        quota=QuotaConfiguration(
            postgres=PostgreSQLDatabaseConfiguration(
                db="quota",
                user="quota_user",
                password="quota_password",
                ssl_mode="require",
                gss_encmode="disable",
            ),
            daily_allowance=250,
            timezone="Europe/Prague",
        ),
    )
    dump_file = tmp_path / "test.json"
    cfg.dump(str(dump_file))

    with open(dump_file, "r", encoding="utf-8") as fin:
        content = json.load(fin)

    # all sections must exists
    assert content["name"] == "test_name"
    assert "service" in content
    assert "authentication" in content
    assert "quota" in content

    assert content["service"]["cors"]["allow_origins"] == ["foo_origin", "bar_origin"]
    assert content["authentication"] == {"module": "noop"}

    quota = content["quota"]
    assert quota["sqlite"] is None
    assert quota["daily_allowance"] == 250
    assert quota["timezone"] == "Europe/Prague"
    assert quota["scheduler"] == {"enabled": True, "period": 3600}
    assert quota["postgres"]["db"] == "quota"
    assert quota["postgres"]["ssl_mode"] == "require"
    # secrets are not written in plain text
    assert quota["postgres"]["password"] == "**********"
