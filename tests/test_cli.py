"""Tests for the command line interface."""

import pytest
from typer.testing import CliRunner

from main import app
from odinauth.cookie import cookie_for
from odinauth.signing import hmac_for

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.ini"
    result = runner.invoke(app, ["init", "--secret", "secret", "--config", str(path)])
    assert result.exit_code == 0
    return path


def test_init_writes_config(config_file):
    text = config_file.read_text(encoding="utf-8")
    assert "secret = secret" in text
    assert "max_age = 86400" in text


def test_hmac_command(config_file):
    result = runner.invoke(
        app,
        ["hmac", "login_name", "role1,role2,role3", "1337357387", "netcat", "--config", str(config_file)],
    )
    assert result.exit_code == 0
    assert result.output.strip() == hmac_for("secret", "login_name", "role1,role2,role3", 1337357387, "netcat")


def test_cookie_command_with_timestamp():
    result = runner.invoke(
        app,
        ["cookie", "login_name", "role1", "netcat", "--timestamp", "1337357638", "--secret", "secret"],
    )
    assert result.exit_code == 0
    assert result.output.strip() == cookie_for("secret", "login_name", "role1", "netcat", timestamp=1337357638)


def test_check_command_accepts_fresh_cookie(config_file):
    value = cookie_for("secret", "login_name", "role1,role2", "netcat")
    result = runner.invoke(app, ["check", value, "netcat", "--config", str(config_file)])
    assert result.exit_code == 0
    assert "user: login_name" in result.output
    assert "roles: role1,role2" in result.output


def test_check_command_rejects_other_user_agent(config_file):
    value = cookie_for("secret", "login_name", "role1", "netcat")
    result = runner.invoke(app, ["check", value, "curl", "--config", str(config_file)])
    assert result.exit_code == 1
    assert "signature" in result.output


def test_missing_config_exits_with_error(tmp_path):
    result = runner.invoke(app, ["check", "x", "netcat", "--config", str(tmp_path / "nope.ini")])
    assert result.exit_code == 1
