import json

import pytest
from pydantic import ValidationError

from chat_proxy.config import DEFAULT_API_BASE_URL, DEFAULT_BOT_PATH, DEFAULT_MODEL, Settings, load_prompt_file


def test_defaults_from_empty_environment():
    settings = Settings.from_env({})

    assert settings.upstream_base_url == DEFAULT_API_BASE_URL
    assert settings.model_id == DEFAULT_MODEL
    assert settings.client_api_key == ""
    assert settings.system_prompt == ""
    assert settings.allowed_origins == ["*"]
    assert settings.upstream_kind == "openai"
    assert settings.bot_path == DEFAULT_BOT_PATH
    assert settings.log_level == "INFO"


def test_reads_environment():
    settings = Settings.from_env({
        "API_BASE_URL": "https://ark.example.com/",
        "CLIENT_API_KEY": "client",
        "UPSTREAM_API_KEY": "sk-up",
        "MODEL": "bot-2024",
        "SYSTEM_PROMPT": "Be kind.",
        "CORS_ORIGINS": "https://a.example, https://b.example,",
        "UPSTREAM_KIND": "BOT",
        "LOG_LEVEL": "debug",
    })

    assert settings.upstream_base_url == "https://ark.example.com"
    assert settings.client_api_key == "client"
    assert settings.upstream_api_key == "sk-up"
    assert settings.model_id == "bot-2024"
    assert settings.system_prompt == "Be kind."
    assert settings.allowed_origins == ["https://a.example", "https://b.example"]
    assert settings.upstream_kind == "bot"
    assert settings.log_level == "DEBUG"


def test_unknown_upstream_kind_is_rejected():
    with pytest.raises(ValidationError):
        Settings.from_env({"UPSTREAM_KIND": "carrier-pigeon"})


def test_prompt_file_used_when_system_prompt_unset(tmp_path):
    prompt_file = tmp_path / "prompt.json"
    prompt_file.write_text(json.dumps({"system": "From file."}), encoding="utf-8")

    settings = Settings.from_env({"PROMPT_FILE": str(prompt_file)})

    assert settings.system_prompt == "From file."


def test_explicit_system_prompt_wins_over_file(tmp_path):
    prompt_file = tmp_path / "prompt.json"
    prompt_file.write_text(json.dumps({"system": "From file."}), encoding="utf-8")

    settings = Settings.from_env({"PROMPT_FILE": str(prompt_file), "SYSTEM_PROMPT": ""})

    assert settings.system_prompt == ""


def test_missing_prompt_file_means_empty_prompt(tmp_path):
    assert load_prompt_file(str(tmp_path / "missing.json")) == ""
    assert load_prompt_file(None) == ""


def test_settings_are_frozen():
    settings = Settings()

    with pytest.raises(ValidationError):
        settings.client_api_key = "changed"
