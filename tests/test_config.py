from __future__ import annotations

import pytest

from storefront_sdk.config import ConfigError, load_config


def test_load_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("STOREFRONT_ENV", raising=False)
    config = load_config()
    assert config.env_name == "dev"
    assert config.api_base_url == "https://api.example.com"
    assert config.connect_timeout_seconds == 5.0
    assert config.read_timeout_seconds == 10.0
    assert config.retries == 3
    assert config.verify_ssl is True
    assert config.app_name == "storefront"


def test_load_config_prefers_env_specific_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STOREFRONT_ENV", "staging")
    monkeypatch.setenv("STOREFRONT_API_BASE_URL_STAGING", "https://staging.example.com/")
    config = load_config()
    assert config.env_name == "staging"
    assert config.api_base_url == "https://staging.example.com"


def test_load_config_requires_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("STOREFRONT_API_BASE_URL", raising=False)
    monkeypatch.setenv("STOREFRONT_ENV", "nowhere")
    with pytest.raises(ConfigError, match="STOREFRONT_API_BASE_URL"):
        load_config()


def test_load_config_rejects_invalid_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STOREFRONT_RETRIES", "many")
    with pytest.raises(ConfigError, match="STOREFRONT_RETRIES"):
        load_config()


def test_load_config_rejects_out_of_range_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STOREFRONT_MAX_CONNECTIONS", "0")
    with pytest.raises(ConfigError, match="STOREFRONT_MAX_CONNECTIONS"):
        load_config()


def test_load_config_reads_tuning_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STOREFRONT_TIMEOUT_SECONDS", "30")
    monkeypatch.setenv("STOREFRONT_CONNECT_TIMEOUT_SECONDS", "2")
    monkeypatch.setenv("STOREFRONT_VERIFY_SSL", "false")
    monkeypatch.setenv("STOREFRONT_APP_NAME", "shop-test")
    config = load_config()
    assert config.connect_timeout_seconds == 2.0
    assert config.read_timeout_seconds == 30.0
    assert config.verify_ssl is False
    assert config.app_name == "shop-test"
