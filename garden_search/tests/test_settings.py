import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from garden_search.config.settings import Settings, load_yaml_config


def write(d, text):
    path = Path(d) / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_yaml_section_is_read():
    with tempfile.TemporaryDirectory() as d:
        path = write(d, "garden_search:\n  default_model: mistralai/mistral-small\n  MAX_RETRIES: 5\n")
        assert load_yaml_config([path]) == {"default_model": "mistralai/mistral-small", "max_retries": 5}


def test_yaml_top_level_keys_are_read():
    with tempfile.TemporaryDirectory() as d:
        path = write(d, "log_level: info\n")
        assert load_yaml_config([path]) == {"log_level": "info"}


def test_missing_or_invalid_yaml_is_ignored():
    with tempfile.TemporaryDirectory() as d:
        assert load_yaml_config([Path(d) / "absent.yaml"]) == {}
        path = write(d, "- just\n- a list\n")
        with pytest.warns(UserWarning):
            assert load_yaml_config([path]) == {}


def test_config_file_env_feeds_settings(monkeypatch):
    with tempfile.TemporaryDirectory() as d:
        path = write(d, "garden_search:\n  app_name: Yaml Garden\n  log_level: warning\n  unknown_key: 1\n")
        monkeypatch.setenv("GARDEN_SEARCH_CONFIG_FILE", str(path))
        monkeypatch.delenv("APP_NAME", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        cfg = Settings(_env_file=None)
    assert cfg.app_name == "Yaml Garden"
    assert cfg.log_level == "WARNING"


def test_environment_beats_yaml(monkeypatch):
    with tempfile.TemporaryDirectory() as d:
        path = write(d, "app_name: Yaml Garden\n")
        monkeypatch.setenv("GARDEN_SEARCH_CONFIG_FILE", str(path))
        monkeypatch.setenv("APP_NAME", "Env Garden")
        cfg = Settings(_env_file=None)
    assert cfg.app_name == "Env Garden"


@pytest.mark.parametrize("field,value", [("log_level", "chatty"), ("openrouter_api_key", "short")])
def test_invalid_values_are_rejected(field, value):
    with pytest.raises(PydanticValidationError):
        Settings(_env_file=None, **{field: value})
