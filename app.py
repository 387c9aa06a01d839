import streamlit as st
import pandas as pd
import requests

import api_client
import dashboard
from log_utils import init_logger
from settings import get_settings

# --- Config ---
settings = get_settings()
init_logger(level=settings.log_level)

st.set_page_config(page_title="Stock Prediction Dashboard", layout="centered")
st.title("📈 Stock Prediction Dashboard")

if "dashboard" not in st.session_state:
    st.session_state.dashboard = dashboard.DashboardState()
state = st.session_state.dashboard

# requests.Session is not shared between browser sessions
if "api_client" not in st.session_state:
    st.session_state.api_client = api_client.ApiClient(settings.api_url, settings.sentiment_api_url)
client = st.session_state.api_client

ACCOUNT_ERRORS = (api_client.ApiError, requests.RequestException, ValueError)


def colored(text, color):
    return f"<span style='color:{color}'><b>{text}</b></span>"


# --- Result Cards ---
def prediction_card(pred):
    with st.container(border=True):
        st.subheader("Price Prediction")
        col1, col2 = st.columns(2)
        col1.caption("Symbol")
        col1.markdown(f"**{pred.symbol}**")
        col2.caption("Direction")
        col2.markdown(colored(pred.direction, dashboard.direction_tone(pred.direction)), unsafe_allow_html=True)

        col3, col4 = st.columns(2)
        col3.caption("Confidence")
        col3.markdown(f"**{dashboard.format_confidence(pred.confidence)}**")
        col4.caption("Timestamp")
        col4.markdown(f"**{dashboard.format_timestamp(pred.timestamp)}**")


def sentiment_card(sent):
    with st.container(border=True):
        st.subheader("Sentiment Analysis")
        st.caption("Average Sentiment")
        st.markdown(colored(dashboard.describe_average(sent.avg_score), dashboard.score_tone(sent.avg_score)),
                    unsafe_allow_html=True)

        st.markdown("#### Headlines")
        headlines = dashboard.visible_headlines(sent)
        if not headlines:
            st.info("No recent headlines found.")
            return
        for item in headlines:
            st.markdown(
                f"- [{item.title}]({item.url})<br>"
                f"{colored(f'{item.label} ({item.score:.2f})', dashboard.score_tone(item.score))}",
                unsafe_allow_html=True
            )
        st.plotly_chart(dashboard.sentiment_chart(sent))


# --- Account Tools ---
def watchlist_ui(token):
    st.sidebar.subheader("⭐ Watchlist")
    try:
        symbols = client.get_watchlist(token).symbols
    except ACCOUNT_ERRORS as e:
        st.sidebar.error(f"Error loading watchlist: {e}")
        return

    if symbols:
        st.sidebar.write(", ".join(symbols))
    else:
        st.sidebar.info("Your watchlist is empty.")

    with st.sidebar.form("Add to Watchlist", clear_on_submit=True):
        new_symbol = st.text_input("Symbol to add")
        added = st.form_submit_button("Add")
    if added:
        new_symbol = dashboard.normalize_symbol(new_symbol)
        if not new_symbol:
            st.sidebar.error(dashboard.EMPTY_SYMBOL_ERROR)
        else:
            try:
                client.add_to_watchlist(new_symbol, token)
                st.sidebar.success(f"✅ {new_symbol} added to watchlist!")
                st.rerun()
            except ACCOUNT_ERRORS as e:
                st.sidebar.error(f"Error adding {new_symbol}: {e}")

    if symbols:
        to_remove = st.sidebar.selectbox("Remove from watchlist", symbols)
        if st.sidebar.button("🗑️ Remove"):
            try:
                client.remove_from_watchlist(to_remove, token)
                st.sidebar.success(f"✅ {to_remove} removed from watchlist!")
                st.rerun()
            except ACCOUNT_ERRORS as e:
                st.sidebar.error(f"Error removing {to_remove}: {e}")


def history_ui(token):
    with st.expander("🕑 Prediction History"):
        col1, col2 = st.columns(2)
        page = col1.number_input("Page", min_value=1, value=1, step=1)
        limit = col2.selectbox("Rows per page", [10, 25, 50], index=0)
        try:
            history = client.fetch_history(token, page=page, limit=limit)
        except ACCOUNT_ERRORS as e:
            st.error(f"Error loading history: {e}")
            return

        if not history.history:
            st.info("No predictions recorded yet.")
            return
        df = pd.DataFrame([h.to_dict() for h in history.history])
        df["confidence"] = df["confidence"].map(dashboard.format_confidence)
        st.dataframe(df)
        st.caption(f"Page {history.page} of {history.page_count} ({history.total} predictions)")


# --- Main Page ---
with st.form("predict_form"):
    col1, col2 = st.columns([4, 1])
    symbol = col1.text_input(
        "Stock symbol",
        placeholder="Enter stock symbol (e.g., AAPL, MSFT)",
        label_visibility="collapsed",
        key="symbol_input",
    )
    submitted = col2.form_submit_button("Predict")

# submit runs inside this rerun, so the spinner is the loading indicator
if submitted:
    with st.spinner("Loading..."):
        dashboard.submit(state, symbol)

if state.error:
    st.error(state.error)

if state.prediction:
    prediction_card(state.prediction)

if state.sentiment:
    sentiment_card(state.sentiment)

if state.prediction or state.sentiment:
    st.download_button(
        "📥 Download Results (CSV)",
        data=dashboard.export_results_csv(state),
        file_name=f"{state.symbol or 'results'}_prediction.csv",
        mime="text/csv",
    )

st.sidebar.header("🔐 Account")
token = st.sidebar.text_input("API token", value=settings.api_token, type="password")
if token:
    watchlist_ui(token)
    history_ui(token)
else:
    st.sidebar.info("Enter an API token to manage your watchlist and prediction history.")

# Footer
st.markdown("---")
st.markdown("""
<div style='text-align: center; color: gray;'>
    <p>Predictions and sentiment are served by the prediction and sentiment APIs</p>
</div>
""", unsafe_allow_html=True)
