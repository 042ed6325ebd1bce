"""Shared UI components for multipage Streamlit app."""

import hmac
import logging
import os
from pathlib import Path
from typing import Any

import streamlit as st

from utils.config_utils import resolve_app_password, resolve_data_source, resolve_example_seed
from utils.data_helpers import QuestionDataError, init_session_state, load_question_csv, maybe_load_dotenv
from utils.docs_ui import GLOSSARY_PAGE_PATH

logger = logging.getLogger(__name__)


def _secrets_map() -> dict[str, Any]:
    try:
        return dict(st.secrets)
    except Exception:
        return {}


def check_authentication() -> bool:
    """Check if user is authenticated. Returns True if authenticated or no password required."""
    maybe_load_dotenv()

    app_password = resolve_app_password({}, _secrets_map(), os.environ)["password"]
    if "app_authenticated" not in st.session_state:
        st.session_state.app_authenticated = False

    if app_password and not st.session_state.app_authenticated:
        st.title("🔒 Conversation Insights")
        st.caption("Enter the app password to continue.")

        pw = st.text_input("Password", type="password", key="_app_password_input")
        col_login, _ = st.columns([1, 3])
        with col_login:
            if st.button("Log in", type="primary"):
                if hmac.compare_digest(str(pw), str(app_password)):
                    st.session_state.app_authenticated = True
                    st.session_state.pop("_app_password_input", None)
                    st.rerun()
                else:
                    st.error("Incorrect password")

        return False

    return True


def _store_questions(source: Any, label: str) -> None:
    try:
        df = load_question_csv(source)
    except QuestionDataError as e:
        st.session_state.load_error = str(e)
        return
    st.session_state.question_df = df
    st.session_state.question_source = label
    st.session_state.load_error = ""
    logger.info("Question data loaded from %s", label)


def render_sidebar() -> dict[str, Any]:
    """Render the shared sidebar and return configuration dict."""
    maybe_load_dotenv()
    secrets = _secrets_map()

    init_session_state(
        {
            "question_df": None,
            "question_source": "",
            "load_error": "",
        }
    )

    data_source = resolve_data_source(st.session_state, secrets, os.environ)
    seed_cfg = resolve_example_seed(st.session_state, secrets, os.environ)

    with st.sidebar:
        st.title("💬 Conversation Insights")
        st.caption("Descriptive analytics over tagged chatbot questions.")

        st.markdown("**📂 Data**")
        uploaded = st.file_uploader("Question tagging CSV", type=["csv"], key="question_upload")
        if uploaded is not None and st.session_state.get("_uploaded_name") != uploaded.name:
            _store_questions(uploaded.getvalue(), f"upload: {uploaded.name}")
            st.session_state._uploaded_name = uploaded.name

        data_path = st.text_input(
            "Or load from path",
            value=data_source["path"],
            help=f"Resolved from {data_source['source']}. Set QUESTION_DATA_PATH to change the default.",
        )
        if st.button("📥 Load file", type="primary", use_container_width=True):
            _store_questions(data_path, data_path)
            st.rerun()

        auto_load = data_source["source"] != "default" or Path(data_source["path"]).is_file()
        if st.session_state.question_df is None and not st.session_state.load_error and auto_load:
            _store_questions(data_source["path"], data_source["path"])

        df = st.session_state.question_df
        if df is not None:
            st.caption(f"{len(df):,} questions from `{st.session_state.question_source}`")
        if st.session_state.load_error:
            st.error(st.session_state.load_error)

    return {
        "question_df": st.session_state.question_df,
        "question_source": st.session_state.question_source,
        "example_seed": seed_cfg["seed"],
    }


DASHBOARD_PAGE_PATH = "pages/1_📊_Dashboard.py"

# (page file, label, icon, blurb) for the landing page.
PAGE_LINKS = [
    (DASHBOARD_PAGE_PATH, "Dashboard", "📊", "Sessions, intents, learning paths, follow-ups and difficulties."),
    (GLOSSARY_PAGE_PATH, "Metrics Glossary", "📚", "How every dashboard number is defined."),
]


def render_landing(config: dict[str, Any]) -> None:
    """Landing page: what the app does, data status, and links to each page."""
    st.title("💬 Conversation Insights")
    st.caption("Descriptive analytics over tagged chatbot questions.")
    st.markdown(
        "Load a question tagging CSV from the sidebar (or set `QUESTION_DATA_PATH`), "
        "then open the dashboard."
    )

    df = config.get("question_df")
    if df is None:
        st.info("No question data loaded yet.")
    else:
        st.success(f"{len(df):,} questions loaded from `{config.get('question_source', '')}`.")

    for path, label, icon, blurb in PAGE_LINKS:
        st.page_link(path, label=label, icon=icon)
        st.caption(blurb)
