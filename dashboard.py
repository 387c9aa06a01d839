"""Page state and rendering helpers for the prediction dashboard."""

import logging
from dataclasses import dataclass
from io import BytesIO
from typing import List, Optional
from urllib.parse import quote

import pandas as pd
import plotly.graph_objs as go
import requests

from market_model import PredictionResponse, SentimentItem, SentimentResponse

logger = logging.getLogger(__name__)

# The page talks to the local services directly rather than through api_client.
PREDICT_URL = "http://localhost:8000"
SENTIMENT_URL = "http://localhost:8001"

MAX_HEADLINES = 5
EMPTY_SYMBOL_ERROR = "Please enter a stock symbol"
UNKNOWN_ERROR = "An unknown error occurred"

LABEL_COLORS = {"positive": "green", "negative": "red", "neutral": "gray"}


@dataclass
class DashboardState:
    symbol: str = ""
    loading: bool = False
    prediction: Optional[PredictionResponse] = None
    sentiment: Optional[SentimentResponse] = None
    error: str = ""

    @property
    def phase(self) -> str:
        if self.loading:
            return "loading"
        if self.prediction or self.sentiment or self.error:
            return "settled"
        return "idle"


def normalize_symbol(symbol) -> str:
    return (symbol or "").strip().upper()


def _get_json(url, error_prefix):
    resp = requests.get(url)
    if not resp.ok:
        raise RuntimeError(f"{error_prefix}: {resp.status_code}")
    return resp.json()


def submit(state: DashboardState, symbol: str) -> DashboardState:
    """
    Handle one form submit: predict first, then sentiment.

    A failed call stops the sequence; whatever was shown before stays as it was.
    """
    state.symbol = normalize_symbol(symbol)
    if not state.symbol:
        state.error = EMPTY_SYMBOL_ERROR
        return state

    state.loading = True
    state.error = ""
    path_symbol = quote(state.symbol, safe="")

    try:
        pred_data = _get_json(f"{PREDICT_URL}/predict/{path_symbol}", "Prediction API error")
        state.prediction = PredictionResponse.from_dict(pred_data)

        sent_data = _get_json(f"{SENTIMENT_URL}/sentiment/{path_symbol}", "Sentiment API error")
        state.sentiment = SentimentResponse.from_dict(sent_data)
    except Exception as err:
        logger.exception("Dashboard request for %s failed", state.symbol)
        state.error = str(err) or UNKNOWN_ERROR
    finally:
        state.loading = False

    return state


# --- Render helpers ---
def visible_headlines(sentiment: Optional[SentimentResponse], limit: int = MAX_HEADLINES) -> List[SentimentItem]:
    if sentiment is None:
        return []
    return sentiment.results[:limit]


def format_confidence(confidence: float) -> str:
    return f"{confidence * 100:.2f}%"


def format_timestamp(timestamp: str) -> str:
    dt = pd.to_datetime(timestamp, errors="coerce")
    if pd.isna(dt):
        return timestamp
    dt = dt.to_pydatetime()
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def direction_tone(direction: str) -> str:
    return "green" if direction == "Up" else "red"


def score_tone(score: float) -> str:
    return "green" if score > 0 else "red"


def describe_average(avg_score: float) -> str:
    label = "Positive" if avg_score > 0 else "Negative"
    return f"{label} ({avg_score:.2f})"


def sentiment_chart(sentiment: SentimentResponse):
    """Donut of headline labels over the headlines actually shown."""
    items = visible_headlines(sentiment)
    counts = pd.Series([(i.label or "neutral").lower() for i in items], dtype="object").value_counts()
    labels = [l.capitalize() for l in counts.index]
    fig = go.Figure(data=[go.Pie(
        labels=labels, values=counts.tolist(), hole=.4,
        marker_colors=[LABEL_COLORS.get(l, "gray") for l in counts.index]
    )])
    fig.update_layout(title="Headline Sentiment Distribution")
    return fig


def export_results_csv(state: DashboardState) -> bytes:
    buffer = BytesIO()

    buffer.write(b'--- PREDICTION ---\n')
    if state.prediction:
        pred = state.prediction
        pd.DataFrame([{
            'Symbol': pred.symbol,
            'Direction': pred.direction,
            'Confidence': pred.confidence,
            'Features Used': pred.features_used,
            'Timestamp': pred.timestamp,
        }]).to_csv(buffer, index=False)

    buffer.write(b'\n--- SENTIMENT ---\n')
    if state.sentiment:
        sent = state.sentiment
        pd.DataFrame([{
            'Symbol': sent.symbol,
            'Average Score': sent.avg_score,
            'Summary': sent.sentiment_summary,
            'Timestamp': sent.timestamp,
        }]).to_csv(buffer, index=False)

        buffer.write(b'\n--- HEADLINES ---\n')
        headlines = pd.DataFrame([h.to_dict() for h in visible_headlines(sent)])
        if not headlines.empty:
            headlines.to_csv(buffer, index=False)

    return buffer.getvalue()
