"""Tests for config.ini loading."""

import pytest

from odinauth import config as config_module
from odinauth.config import CookieConfig, load_config, reset_config_cache, write_config


def test_write_then_load_config(tmp_path):
    path = write_config(tmp_path / "config.ini", "s3cr%t", max_age=3600, clock_skew=60)
    config = load_config(path)
    assert config.secret == "s3cr%t"
    assert config.cookie.max_age == 3600
    assert config.cookie.clock_skew == 60
    assert config.cookie.cookie_name == "odin_auth"
    assert config.server.port == 8080
    assert config.logging.level == "INFO"


def test_defaults_when_only_secret_given(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("[odinauth]\nsecret = abc\n", encoding="utf-8")
    config = load_config(path)
    assert config.cookie.max_age == 86400
    assert config.cookie.clock_skew == 300


def test_missing_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.ini")


def test_empty_secret_raises(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("[odinauth]\nsecret =\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_negative_window_raises(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("[odinauth]\nsecret = abc\nmax_age = -1\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_repr_hides_secret():
    assert "hunter2" not in repr(CookieConfig(secret="hunter2"))


def test_get_config_is_cached(tmp_path, monkeypatch):
    path = write_config(tmp_path / "config.ini", "abc")
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", path)
    reset_config_cache()
    try:
        first = config_module.get_config()
        assert first is config_module.get_config()
        assert first.secret == "abc"
    finally:
        reset_config_cache()
