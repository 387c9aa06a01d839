"""
HTTP client for the prediction and sentiment services.

One request per call: no retries, timeouts or backoff. Non-2xx responses are
raised as ApiError carrying the server's ``detail`` message when it sends one.
"""

import logging
from urllib.parse import quote

import requests

from market_model import (
    HistoryResponse,
    PredictionResponse,
    SentimentResponse,
    Watchlist,
    WatchlistUpdate,
)
from settings import get_settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, message, status_code=None, detail=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail


class AuthenticationRequired(ApiError):
    def __init__(self):
        super().__init__("Authentication token is required")


def _error_detail(resp):
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("detail"):
        return str(body["detail"])
    return None


def raise_for_api_error(resp, prefix="API error"):
    """Raise ApiError for a non-2xx response, preferring the body's detail message."""
    if resp.ok:
        return
    detail = _error_detail(resp)
    message = detail or f"{prefix}: {resp.status_code}"
    logger.warning("%s failed: %s", resp.url, message)
    raise ApiError(message, status_code=resp.status_code, detail=detail)


class ApiClient:
    def __init__(self, api_url=None, sentiment_api_url=None, session=None):
        if api_url is None or sentiment_api_url is None:
            settings = get_settings()
            api_url = api_url or settings.api_url
            sentiment_api_url = sentiment_api_url or settings.sentiment_api_url
        self.api_url = api_url.rstrip("/")
        self.sentiment_api_url = sentiment_api_url.rstrip("/")
        self.session = session or requests.Session()

    def fetch_with_auth(self, url, token, method="GET", json=None, headers=None):
        if not token:
            raise AuthenticationRequired()

        merged = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        }
        merged.update(headers or {})

        logger.debug("%s %s", method, url)
        resp = self.session.request(method, url, headers=merged, json=json)
        raise_for_api_error(resp)
        return resp.json()

    # --- Endpoints ---
    def fetch_predict(self, symbol, token):
        data = self.fetch_with_auth(f"{self.api_url}/predict/{quote(symbol, safe='')}", token)
        return PredictionResponse.from_dict(data)

    def fetch_sentiment(self, symbol):
        url = f"{self.sentiment_api_url}/sentiment/{quote(symbol, safe='')}"
        logger.debug("GET %s", url)
        resp = self.session.get(url)
        raise_for_api_error(resp, prefix="Sentiment API error")
        return SentimentResponse.from_dict(resp.json())

    def fetch_history(self, token, page=1, limit=10):
        data = self.fetch_with_auth(f"{self.api_url}/history?page={int(page)}&limit={int(limit)}", token)
        return HistoryResponse.from_dict(data)

    def add_to_watchlist(self, symbol, token):
        data = self.fetch_with_auth(f"{self.api_url}/watchlist", token, method="POST", json={"symbol": symbol})
        return WatchlistUpdate.from_dict(data)

    def remove_from_watchlist(self, symbol, token):
        data = self.fetch_with_auth(f"{self.api_url}/watchlist/{quote(symbol, safe='')}", token, method="DELETE")
        return WatchlistUpdate.from_dict(data)

    def get_watchlist(self, token):
        return Watchlist.from_dict(self.fetch_with_auth(f"{self.api_url}/watchlist", token))


_default_client = None


def default_client():
    global _default_client
    if _default_client is None:
        _default_client = ApiClient()
    return _default_client


def reset_default_client():
    global _default_client
    _default_client = None


def fetch_with_auth(url, token, method="GET", json=None, headers=None):
    return default_client().fetch_with_auth(url, token, method=method, json=json, headers=headers)


def fetch_predict(symbol, token):
    return default_client().fetch_predict(symbol, token)


def fetch_sentiment(symbol):
    return default_client().fetch_sentiment(symbol)


def fetch_history(token, page=1, limit=10):
    return default_client().fetch_history(token, page=page, limit=limit)


def add_to_watchlist(symbol, token):
    return default_client().add_to_watchlist(symbol, token)


def remove_from_watchlist(symbol, token):
    return default_client().remove_from_watchlist(symbol, token)


def get_watchlist(token):
    return default_client().get_watchlist(token)
