from __future__ import annotations

import os


def test_defaults(clean_env):
    s = clean_env.get_settings()
    assert s.api_url == "http://localhost:8000"
    assert s.sentiment_api_url == "http://localhost:8001"
    assert s.api_token == ""
    assert s.log_level == "INFO"


def test_env_overrides(clean_env, monkeypatch):
    monkeypatch.setenv("STOCK_API_URL", "https://api.example.com/")
    monkeypatch.setenv("SENTIMENT_API_URL", "https://sentiment.example.com")
    monkeypatch.setenv("STOCK_API_TOKEN", " abc123 ")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = clean_env.get_settings()
    assert s.api_url == "https://api.example.com"
    assert s.sentiment_api_url == "https://sentiment.example.com"
    assert s.api_token == "abc123"
    assert s.log_level == "DEBUG"


def test_api_url_alias(clean_env, monkeypatch):
    monkeypatch.setenv("API_URL", "http://backend:9000")
    assert clean_env.get_settings().api_url == "http://backend:9000"


def test_dotenv_file_is_loaded(clean_env, monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("SENTIMENT_API_URL=http://from-dotenv:8001\n", encoding="utf-8")
    try:
        s = clean_env.get_settings()
        assert s.sentiment_api_url == "http://from-dotenv:8001"
    finally:
        # load_dotenv writes straight into os.environ
        os.environ.pop("SENTIMENT_API_URL", None)
