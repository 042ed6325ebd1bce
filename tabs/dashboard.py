"""Conversation Insight Dashboard tab renderer."""

from __future__ import annotations

import hashlib
import json
import random

import pandas as pd
import streamlit as st

from utils import (
    build_dashboard_report,
    category_pie_chart,
    csv_bytes_any,
    difficulty_types_chart,
    follow_up_chart_rows,
    follow_up_pie_chart,
    format_number,
    questions_per_session_chart,
    report_to_dict,
    select_example_questions,
)
from utils.charts import INTENT_COLORS
from utils.conversation_reports import DashboardReport
from utils.docs_ui import metric_with_help, render_page_help

INTENT_EXAMPLE_LABELS = {
    "problem_solving": "Problem Solving",
    "knowledge_seeking": "Knowledge Seeking",
    "decision_making": "Decision Making",
}
COMPLEXITY_EXAMPLE_LABELS = {
    "beginner": "Beginner",
    "intermediate": "Intermediate",
    "advanced": "Advanced",
}


def _fingerprint(df: pd.DataFrame) -> str:
    return hashlib.sha256(df.to_csv(index=False).encode("utf-8")).hexdigest()


def _rng(seed: int | None) -> random.Random:
    return random.Random(seed) if seed is not None else random.Random()


def _render_examples(title: str, examples: dict[str, str], labels: dict[str, str]) -> None:
    st.markdown(f"**{title}**")
    for key, label in labels.items():
        st.markdown(f"_{label}:_")
        st.caption(examples.get(key, ""))


def _learning_path_table(report: DashboardReport) -> pd.DataFrame:
    share = {row["name"]: row["percentage"] for row in report.learning_paths}
    return pd.DataFrame(
        [
            {
                "Learning Path": row["path"],
                "Questions": row["total"],
                "Percentage": format_number(share.get(row["path"]), suffix="%"),
                "Dominant Intent": row["dominant_intent"],
                "Intent %": format_number(row["dominant_intent_percentage"], suffix="%"),
            }
            for row in report.path_intents
        ]
    )


def _render_sessions(report: DashboardReport) -> None:
    st.subheader("1. Session Activity Analysis")
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        metric_with_help("Total Sessions", f"{report.sessions.sessions_count:,}", metric_id="total_sessions")
    with c2:
        metric_with_help("Total Questions", f"{report.sessions.total_questions:,}", metric_id="total_questions")
    with c3:
        metric_with_help(
            "Median Questions/Session",
            format_number(report.sessions.median_questions_per_session, digits=2),
            metric_id="median_questions_per_session",
        )
    with c4:
        metric_with_help(
            "Follow-up Rate",
            format_number(report.follow_ups.follow_up_rate, suffix="%"),
            metric_id="follow_up_rate",
        )

    chart = questions_per_session_chart(report.sessions.distribution)
    if chart is not None:
        st.altair_chart(chart, use_container_width=True)


def _render_question_types(report: DashboardReport) -> None:
    st.subheader("2. Question Type Analysis")
    left, right = st.columns(2)

    with left:
        with st.container(border=True):
            chart = category_pie_chart(report.intents, "User Intent", color_map=INTENT_COLORS)
            if chart is not None:
                st.altair_chart(chart, use_container_width=True)
            _render_examples("Example Questions by Intent", report.examples.intents, INTENT_EXAMPLE_LABELS)

    with right:
        with st.container(border=True):
            chart = category_pie_chart(report.complexity, "Question Complexity")
            if chart is not None:
                st.altair_chart(chart, use_container_width=True)
            _render_examples("Example Questions by Complexity", report.examples.complexity, COMPLEXITY_EXAMPLE_LABELS)

    st.markdown("#### Learning Path Analysis")
    table = _learning_path_table(report)
    if table.empty:
        st.info("No questions have a learning path.")
    else:
        st.dataframe(table, use_container_width=True, hide_index=True)

    follow_chart = follow_up_pie_chart(follow_up_chart_rows(report.follow_ups))
    if follow_chart is not None:
        st.altair_chart(follow_chart, use_container_width=True)


def _render_satisfaction(report: DashboardReport) -> None:
    st.subheader("3. User Satisfaction Analysis")
    left, right = st.columns(2)
    diff = report.difficulties

    with left:
        with st.container(border=True):
            metric_with_help(
                "Session Difficulty Rate",
                format_number(diff.difficulty_rate, suffix="%"),
                metric_id="difficulty_rate",
            )
            st.caption("of sessions encountered difficulties")
            s1, s2 = st.columns(2)
            s1.metric("Sessions with issues", f"{diff.sessions_with_difficulties:,}")
            s2.metric("Total sessions", f"{diff.total_sessions:,}")

    with right:
        chart = difficulty_types_chart(diff.type_counts)
        if chart is None:
            st.info("No difficulty types recorded.")
        else:
            st.altair_chart(chart, use_container_width=True)


def _render_downloads(report: DashboardReport) -> None:
    st.subheader("Downloads")
    d1, d2 = st.columns(2)
    d1.download_button(
        "Download learning_paths.csv",
        data=csv_bytes_any([{k: v for k, v in row.items() if k != "intents"} for row in report.path_intents]),
        file_name="learning_paths.csv",
        mime="text/csv",
    )
    d2.download_button(
        "Download conversation_report.json",
        data=json.dumps(report_to_dict(report), indent=2, default=str).encode("utf-8"),
        file_name="conversation_report.json",
        mime="application/json",
    )


def render(question_df: pd.DataFrame | None, example_seed: int | None = None) -> None:
    """Render the Conversation Insight Dashboard."""
    st.title("📊 Conversation Insight Dashboard")
    render_page_help("dashboard")

    if question_df is None:
        st.info(
            "Load a question tagging CSV from the sidebar to see session, intent, "
            "learning path and difficulty reports."
        )
        return

    fingerprint = _fingerprint(question_df)
    if fingerprint != st.session_state.get("dashboard_fingerprint"):
        st.session_state["dashboard_report"] = build_dashboard_report(question_df, rng=_rng(example_seed))
        st.session_state["dashboard_fingerprint"] = fingerprint

    report: DashboardReport = st.session_state["dashboard_report"]

    if st.button("🎲 New example questions", key="dashboard_reroll_examples"):
        report.examples = select_example_questions(question_df, rng=_rng(None))

    if not report.sessions.total_questions:
        st.warning("The loaded file has no question rows.")

    _render_sessions(report)
    st.markdown("---")
    _render_question_types(report)
    st.markdown("---")
    _render_satisfaction(report)
    st.markdown("---")
    _render_downloads(report)
