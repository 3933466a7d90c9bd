import pytest

from garden_search.domain.exceptions import ValidationError
from garden_search.providers import create_client
from garden_search.providers.openrouter_client import OpenRouterClient


class DummySettings:
    openrouter_api_key = "sk-or-test-123456"
    openrouter_base_url = "https://proxy.example/api/v1"
    default_model = "openai/gpt-4o-mini"
    default_temperature = 0.4
    http_timeout = 10.0
    max_retries = 5
    app_url = "https://garden.example"
    app_name = "Garden"


def test_create_client_from_settings():
    client = create_client(DummySettings())
    assert isinstance(client, OpenRouterClient)
    assert client.config.base_url == "https://proxy.example/api/v1"
    assert client.config.default_temperature == 0.4
    assert client.config.timeout == 10.0
    assert client.config.max_retries == 5
    assert client.config.app_name == "Garden"


def test_create_client_model_override():
    client = create_client(DummySettings(), model="mistralai/mistral-small")
    assert client.config.default_model == "mistralai/mistral-small"


def test_create_client_uses_module_settings(monkeypatch):
    monkeypatch.setattr("garden_search.providers.settings", DummySettings())
    assert create_client().config.api_key == "sk-or-test-123456"


def test_create_client_without_key():
    class NoKey(DummySettings):
        openrouter_api_key = None

    with pytest.raises(ValidationError):
        create_client(NoKey())
