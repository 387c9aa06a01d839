# market_model.py
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any


def _require(data: Dict[str, Any], key: str, kind: str):
    if not isinstance(data, dict):
        raise ValueError(f"Malformed {kind} response: expected an object")
    if key not in data:
        raise ValueError(f"Malformed {kind} response: missing '{key}'")
    return data[key]


def _coerce(value, cast, key: str, kind: str):
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise ValueError(f"Malformed {kind} response: bad '{key}'") from None


def _field(data: Dict[str, Any], key: str, kind: str, cast):
    return _coerce(_require(data, key, kind), cast, key, kind)


def _optional(data: Dict[str, Any], key: str, kind: str, cast, default):
    value = data.get(key)
    if value is None or value == "":
        return default
    return _coerce(value, cast, key, kind)


def _require_list(data: Dict[str, Any], key: str, kind: str) -> list:
    # null counts as an empty list
    value = _require(data, key, kind)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"Malformed {kind} response: bad '{key}'")
    return value


@dataclass
class PredictionResponse:
    symbol: str
    timestamp: str
    direction: str  # Up/Down
    confidence: float  # 0..1
    features_used: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PredictionResponse":
        kind = "prediction"
        return cls(
            symbol=_field(data, "symbol", kind, str),
            timestamp=_field(data, "timestamp", kind, str),
            direction=_field(data, "direction", kind, str),
            confidence=_field(data, "confidence", kind, float),
            features_used=_optional(data, "features_used", kind, int, 0),
        )

    @property
    def is_up(self) -> bool:
        return self.direction == "Up"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SentimentItem:
    title: str
    url: str
    published_at: str
    score: float  # signed polarity
    label: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SentimentItem":
        kind = "sentiment headline"
        return cls(
            title=_field(data, "title", kind, str),
            url=_optional(data, "url", kind, str, ""),
            published_at=_optional(data, "publishedAt", kind, str, ""),
            score=_field(data, "score", kind, float),
            label=_optional(data, "label", kind, str, ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "publishedAt": self.published_at,
            "score": self.score,
            "label": self.label,
        }


@dataclass
class SentimentResponse:
    symbol: str
    timestamp: str
    results: List[SentimentItem] = field(default_factory=list)
    avg_score: float = 0.0
    sentiment_summary: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SentimentResponse":
        kind = "sentiment"
        return cls(
            symbol=_field(data, "symbol", kind, str),
            timestamp=_field(data, "timestamp", kind, str),
            results=[SentimentItem.from_dict(r) for r in _require_list(data, "results", kind)],
            avg_score=_field(data, "avg_score", kind, float),
            sentiment_summary=_optional(data, "sentiment_summary", kind, str, ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "timestamp": self.timestamp,
            "results": [r.to_dict() for r in self.results],
            "avg_score": self.avg_score,
            "sentiment_summary": self.sentiment_summary,
        }


@dataclass
class HistoryItem:
    symbol: str
    timestamp: str
    prediction: str
    actual: str
    confidence: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryItem":
        kind = "history item"
        return cls(
            symbol=_field(data, "symbol", kind, str),
            timestamp=_field(data, "timestamp", kind, str),
            prediction=_field(data, "prediction", kind, str),
            actual=_optional(data, "actual", kind, str, ""),
            confidence=_optional(data, "confidence", kind, float, 0.0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class HistoryResponse:
    history: List[HistoryItem] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryResponse":
        kind = "history"
        return cls(
            history=[HistoryItem.from_dict(i) for i in _require_list(data, "history", kind)],
            total=_optional(data, "total", kind, int, 0),
            page=_optional(data, "page", kind, int, 1),
            limit=_optional(data, "limit", kind, int, 10),
        )

    @property
    def page_count(self) -> int:
        if self.limit <= 0:
            return 1
        return max(1, -(-self.total // self.limit))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "history": [h.to_dict() for h in self.history],
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
        }


@dataclass
class WatchlistUpdate:
    success: bool

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WatchlistUpdate":
        return cls(success=_field(data, "success", "watchlist update", bool))


@dataclass
class Watchlist:
    symbols: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Watchlist":
        symbols = _require_list(data, "symbols", "watchlist")
        return cls(symbols=[str(s) for s in symbols])
