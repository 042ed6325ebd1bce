"""Tab modules for the Streamlit app."""

from tabs.dashboard import render as render_dashboard

__all__ = [
    "render_dashboard",
]
