"""Reusable documentation UI components.

These helpers power:
  - the dashboard "How to read this" panel
  - inline KPI info popovers
  - the Metrics Glossary page

All *content* lives in :mod:`utils.metrics_registry`.
"""

from __future__ import annotations

from typing import Any

import pandas as pd
import streamlit as st

from utils.metrics_registry import METRICS, PAGES


# Keep in sync with the glossary page filename.
GLOSSARY_PAGE_PATH = "pages/0_📚_Metrics_Glossary.py"


def _get_query_param(key: str) -> str | None:
    k = str(key or "").strip()
    if not k:
        return None
    try:
        v = st.query_params.get(k)
    except Exception:
        return None
    return None if v is None else str(v)


def glossary_link(metric_id: str | None = None, *, label: str = "📚 Open Metrics Glossary") -> None:
    """Render a link to the Metrics Glossary, optionally deep-linked to a metric."""
    mid = str(metric_id or "").strip()
    qp = {"metric": mid} if mid else None
    st.page_link(GLOSSARY_PAGE_PATH, label=label, query_params=qp)


def get_metric_doc(metric_id: str) -> dict[str, Any] | None:
    """Return the documentation dict for a metric_id, if present."""
    return METRICS.get(str(metric_id or "").strip())


def render_metric_doc(metric_id: str, *, show_id: bool = True) -> None:
    """Render the full documentation for a metric inside the current container."""
    metric_id = str(metric_id or "").strip()
    doc = get_metric_doc(metric_id)
    if not doc:
        st.caption("No documentation available for this metric yet.")
        if metric_id:
            st.code(metric_id)
        return

    st.markdown(f"**{doc.get('name', metric_id)}**")
    if show_id:
        st.caption(f"ID: `{metric_id}`")

    definition = str(doc.get("definition") or "").strip()
    if definition:
        st.markdown(definition)

    formula = str(doc.get("formula") or "").strip()
    if formula:
        st.markdown("**How it's computed**")
        st.markdown(formula)

    provenance = str(doc.get("provenance") or "").strip()
    if provenance:
        st.markdown("**Where it comes from**")
        st.markdown(provenance)

    caveats = doc.get("caveats") or []
    if caveats:
        st.markdown("**Caveats**")
        for c in caveats:
            if str(c).strip():
                st.markdown(f"- {c}")


def metric_with_help(
    label: str,
    value: Any,
    *,
    metric_id: str | None = None,
    help_md: str | None = None,
) -> None:
    """Render a metric with a small inline help popover."""
    left, right = st.columns([0.86, 0.14], gap="small")
    with left:
        st.metric(label, value)
    with right:
        if not metric_id and not help_md:
            return
        with st.popover("ℹ️"):
            if metric_id:
                render_metric_doc(metric_id)
                st.divider()
                glossary_link(metric_id, label="📚 Open in glossary")
            if help_md:
                st.markdown(help_md)


def render_page_help(page_id: str, *, expanded: bool = False) -> None:
    """Render a standardized per-page help expander."""
    page_id = str(page_id or "").strip().lower()
    doc = PAGES.get(page_id)
    if not doc:
        return

    with st.expander("How to read this page", expanded=expanded):
        st.markdown(f"#### {doc.get('title') or 'How to read this page'}")

        for heading, key in (("What this page is for", "what"), ("What data it uses", "data")):
            lines = [str(x) for x in (doc.get(key) or []) if str(x).strip()]
            if lines:
                st.markdown(f"**{heading}**")
                for line in lines:
                    st.markdown(f"- {line}")

        key_metrics = doc.get("key_metrics") or []
        if key_metrics:
            st.markdown("**Key metrics on this page**")
            for mid in key_metrics:
                mdoc = get_metric_doc(mid)
                if mdoc:
                    st.markdown(f"- **{mdoc.get('name', mid)}** (`{mid}`): {mdoc.get('definition', '')}")
                else:
                    st.markdown(f"- `{mid}`")

        pitfalls = [str(x) for x in (doc.get("pitfalls") or []) if str(x).strip()]
        if pitfalls:
            st.markdown("**Common pitfalls**")
            for line in pitfalls:
                st.markdown(f"- {line}")

        glossary_link()


def render_metrics_glossary_page() -> None:
    """Render the Metrics Glossary page."""
    st.title("📚 Metrics Glossary")
    st.caption("Definitions, formulas, provenance, and caveats for dashboard metrics.")

    df = pd.DataFrame(
        [
            {
                "metric_id": metric_id,
                "name": doc.get("name", metric_id),
                "category": doc.get("category", ""),
                "definition": doc.get("definition", ""),
                "used_in": ", ".join(doc.get("used_in") or []),
            }
            for metric_id, doc in METRICS.items()
        ]
    )
    if df.empty:
        st.warning("No metrics have been registered yet.")
        return

    df = df.sort_values(["category", "name"], na_position="last").reset_index(drop=True)

    q = st.text_input("Search", value="", placeholder="e.g. session, intent, difficulty")
    view = df
    if q.strip():
        ql = q.strip().lower()
        view = df[
            df["metric_id"].str.lower().str.contains(ql, regex=False)
            | df["name"].str.lower().str.contains(ql, regex=False)
            | df["definition"].str.lower().str.contains(ql, regex=False)
        ]

    st.dataframe(view, use_container_width=True, hide_index=True)

    options = view["metric_id"].tolist()
    deep_link_metric = _get_query_param("metric")
    if deep_link_metric and deep_link_metric in METRICS and deep_link_metric not in options:
        options = [deep_link_metric] + options
    if not options:
        st.info("No metrics match the search.")
        return

    index = options.index(deep_link_metric) if deep_link_metric in options else 0
    selected = st.selectbox(
        "Select a metric",
        options=options,
        index=index,
        format_func=lambda mid: f"{METRICS.get(mid, {}).get('name', mid)}  ·  {mid}",
    )
    with st.container(border=True):
        render_metric_doc(selected, show_id=True)
