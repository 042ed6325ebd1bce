"""Chart utilities for the Streamlit app."""

from typing import Any

import altair as alt
import pandas as pd

INTENT_COLORS = {
    "problem_solving": "#0088FE",
    "knowledge_seeking": "#00C49F",
    "decision_making": "#FFBB28",
    "greeting": "#FF8042",
    "clarification": "#8884d8",
    "crisis_management": "#82ca9d",
    "validation": "#ffc658",
    "off_topic": "#8dd1e1",
}

PALETTE = ["#0088FE", "#00C49F", "#FFBB28", "#FF8042", "#8884d8", "#82ca9d", "#ffc658", "#8dd1e1"]


def _category_colors(names: list[str], color_map: dict[str, str] | None) -> alt.Scale:
    color_map = color_map or {}
    colors = [color_map.get(n) or PALETTE[i % len(PALETTE)] for i, n in enumerate(names)]
    return alt.Scale(domain=names, range=colors)


def questions_per_session_chart(distribution: list[dict[str, int]]) -> alt.Chart | None:
    """Create questions-per-session distribution bar chart."""
    if not distribution:
        return None
    df = pd.DataFrame(distribution)
    return (
        alt.Chart(df)
        .mark_bar(color="#8884d8")
        .encode(
            x=alt.X("questions:O", title="Number of Questions"),
            y=alt.Y("sessions:Q", title="Number of Sessions"),
            tooltip=[
                alt.Tooltip("questions:O", title="Questions"),
                alt.Tooltip("sessions:Q", title="Sessions", format=","),
            ],
        )
        .properties(title="Questions per session", height=280)
    )


def category_pie_chart(
    rows: list[dict[str, Any]],
    title: str,
    color_map: dict[str, str] | None = None,
) -> alt.Chart | None:
    """Create a pie chart from ``{"name", "value", "percentage"}`` rows."""
    if not rows:
        return None
    df = pd.DataFrame(rows)
    names = df["name"].astype(str).tolist()
    return (
        alt.Chart(df)
        .mark_arc(innerRadius=50)
        .encode(
            theta=alt.Theta("value:Q", title="Questions"),
            color=alt.Color("name:N", title=title, scale=_category_colors(names, color_map), sort=names),
            order=alt.Order("value:Q", sort="descending"),
            tooltip=[
                alt.Tooltip("name:N", title=title),
                alt.Tooltip("value:Q", title="Questions", format=","),
                alt.Tooltip("percentage:Q", title="%", format=".1f"),
            ],
        )
        .properties(title=title, height=250)
    )


def follow_up_pie_chart(rows: list[dict[str, Any]]) -> alt.Chart | None:
    """Create with/without follow-up pie chart."""
    if not rows or not sum(int(r.get("value") or 0) for r in rows):
        return None
    df = pd.DataFrame(rows)
    return (
        alt.Chart(df)
        .mark_arc(innerRadius=50)
        .encode(
            theta=alt.Theta("value:Q"),
            color=alt.Color("name:N", title="Follow-ups"),
            tooltip=[
                alt.Tooltip("name:N", title="Follow-ups"),
                alt.Tooltip("value:Q", title="Questions", format=","),
            ],
        )
        .properties(title="Follow-up questions", height=250)
    )


def difficulty_types_chart(type_counts: list[dict[str, Any]]) -> alt.Chart | None:
    """Create horizontal bar chart of difficulty types."""
    if not type_counts:
        return None
    df = pd.DataFrame(type_counts)
    return (
        alt.Chart(df)
        .mark_bar(color="#FF8042")
        .encode(
            x=alt.X("value:Q", title="Occurrences"),
            y=alt.Y("name:N", sort="-x", title="Difficulty type"),
            tooltip=[
                alt.Tooltip("name:N", title="Difficulty type"),
                alt.Tooltip("value:Q", title="Occurrences", format=","),
            ],
        )
        .properties(title="Types of difficulties")
    )
