"""
Pytest fixtures for the dashboard tests. HTTP is mocked; no live services.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

PREDICTION = {
    "symbol": "AAPL",
    "timestamp": "2024-05-01T14:30:00",
    "direction": "Up",
    "confidence": 0.8765,
    "features_used": 42,
}


def headline(i: int, score: float = 0.5, label: str = "positive") -> dict:
    return {
        "title": f"Headline {i}",
        "url": f"https://news.example.com/{i}",
        "publishedAt": "2024-05-01T12:00:00Z",
        "score": score,
        "label": label,
    }


def sentiment_payload(n: int = 3, avg_score: float = 0.25) -> dict:
    return {
        "symbol": "AAPL",
        "timestamp": "2024-05-01T14:31:00",
        "results": [headline(i) for i in range(n)],
        "avg_score": avg_score,
        "sentiment_summary": "Positive" if avg_score > 0 else "Negative",
    }


def make_response(status: int = 200, body=None, url: str = "http://test/"):
    """Stand-in for requests.Response: ok, status_code, url, json()."""
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.url = url
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body
    return resp


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Unset service env vars and point .env loading at an empty directory."""
    for name in ("STOCK_API_URL", "API_URL", "SENTIMENT_API_URL", "STOCK_API_TOKEN", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    import settings

    monkeypatch.setattr(settings, "_ENV_PATH", tmp_path / ".env")
    return settings


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    from api_client import ApiClient

    return ApiClient(api_url="http://api.test", sentiment_api_url="http://sentiment.test", session=session)
