"""Tests for the omada-api command."""

import json

import httpx
import pytest

from omada_api import OmadaSession
from omada_api.cli import main
from omada_api.config import ENV_VARS


@pytest.fixture
def cli_env(monkeypatch, tmp_path, controller):
    """Point the CLI at the fake controller."""
    for env_var in ENV_VARS.values():
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OMADA_URL", "https://controller.test")
    monkeypatch.setenv("OMADA_PASS", "secret")

    def from_config(cls, config):
        config.validate()
        return cls(
            config.base_url,
            config.username,
            config.password,
            transport=controller.transport(),
        )

    monkeypatch.setattr(OmadaSession, "from_config", classmethod(from_config))
    return controller


def test_demo(cli_env, capsys):
    cli_env.routes[("GET", "/C1/api/v2/sites/S1/devices")] = lambda request: httpx.Response(
        200,
        json={
            "errorCode": 0,
            "result": {"data": [{"name": "Core-Switch", "type": "switch", "status": 14}]},
        },
    )
    cli_env.routes[("GET", "/C1/api/v2/sites/S1/setting/lan/networks")] = (
        lambda request: httpx.Response(
            200,
            json={
                "errorCode": 0,
                "result": {
                    "data": [{"name": "IoT", "vlanId": 20, "subnet": "10.0.20.1", "cidr": 24}]
                },
            },
        )
    )

    assert main([]) == 0

    out = capsys.readouterr().out
    assert "Core-Switch (switch, status: 14)" in out
    assert "IoT (VLAN 20, 10.0.20.1/24)" in out
    assert "(no rules)" in out


def test_sites_json(cli_env, capsys):
    assert main(["--json", "sites"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload == {
        "controller_id": "C1",
        "controller_version": "5.15.8",
        "site_id": "S1",
        "site_name": "Default",
    }


def test_explore_json(cli_env, capsys):
    assert main(["--json", "explore"]) == 0

    report = json.loads(capsys.readouterr().out)
    assert "/setting/lan/networks" in report
    assert report["/devices"]["errorCode"] == 0


def test_login_failure_exit_code(cli_env, capsys):
    cli_env.login_response = {"errorCode": -30109, "msg": "bad credentials"}

    assert main(["demo"]) == 1
    assert "bad credentials" in capsys.readouterr().err


def test_missing_config_exit_code(cli_env, monkeypatch, capsys):
    monkeypatch.delenv("OMADA_PASS")

    assert main([]) == 1
    assert "password not set" in capsys.readouterr().err


def test_invalid_yaml_exit_code(cli_env, tmp_path, capsys):
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("omada: [unclosed\n")

    assert main(["--config", str(config_file)]) == 1
    assert "Invalid YAML" in capsys.readouterr().err


def test_bad_log_level_flag(cli_env, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--log-level", "LOUD"])

    assert exc_info.value.code == 2
    assert "invalid choice" in capsys.readouterr().err


def test_bad_log_level_env_exit_code(cli_env, monkeypatch, capsys):
    monkeypatch.setenv("LOG_LEVEL", "LOUD")

    assert main([]) == 1
    assert "Invalid log level 'LOUD'" in capsys.readouterr().err
