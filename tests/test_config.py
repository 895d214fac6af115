"""
tests/test_config.py

Startup configuration: fail fast without a token, never leak it.
"""

import pytest

from core.config import DEFAULT_BASE_URL, DEFAULT_MODEL, ReplicateConfig, load_config
from core.errors import ConfigurationError


def test_token_required():
    with pytest.raises(ConfigurationError, match="REPLICATE_API_TOKEN"):
        load_config({})


def test_blank_token_rejected():
    with pytest.raises(ConfigurationError):
        load_config({"REPLICATE_API_TOKEN": "   "})


def test_defaults():
    config = load_config({"REPLICATE_API_TOKEN": "r8_abc"})
    assert config.api_token == "r8_abc"
    assert config.base_url == DEFAULT_BASE_URL
    assert config.model == DEFAULT_MODEL
    assert config.timeout_seconds == 60.0
    assert config.predictions_path == "/models/black-forest-labs/flux-schnell/predictions"


def test_overrides():
    config = load_config(
        {
            "REPLICATE_API_TOKEN": "r8_abc",
            "REPLICATE_API_BASE_URL": "http://localhost:5000/v1/",
            "REPLICATE_MODEL": "acme/flux-dev",
            "REPLICATE_TIMEOUT_SECONDS": "15",
        }
    )
    assert config.base_url == "http://localhost:5000/v1"
    assert config.model == "acme/flux-dev"
    assert config.timeout_seconds == 15.0


@pytest.mark.parametrize("value", ["soon", "0", "-5"])
def test_bad_timeout(value):
    with pytest.raises(ConfigurationError, match="REPLICATE_TIMEOUT_SECONDS"):
        load_config({"REPLICATE_API_TOKEN": "r8_abc", "REPLICATE_TIMEOUT_SECONDS": value})


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("REPLICATE_API_TOKEN", "r8_from_env")
    for name in ("REPLICATE_MODEL", "REPLICATE_API_BASE_URL", "REPLICATE_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    assert load_config().api_token == "r8_from_env"


def test_token_hidden_from_repr():
    config = ReplicateConfig(api_token="r8_secret")
    assert "r8_secret" not in repr(config)


def test_headers():
    headers = ReplicateConfig(api_token="r8_abc").headers
    assert headers == {
        "Authorization": "Bearer r8_abc",
        "Content-Type": "application/json",
        "Prefer": "wait",
    }


def test_config_is_immutable():
    config = ReplicateConfig(api_token="r8_abc")
    with pytest.raises(AttributeError):
        config.api_token = "other"
