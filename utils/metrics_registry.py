"""Metric + page documentation registry.

This registry is the single source of truth for:
  1) inline KPI tooltips (popover / expander help)
  2) the Metrics Glossary page
  3) per-page "How to read this" sections

It is intentionally **static** (plain dicts) so definitions can be edited
without touching UI code.

Notes on provenance language
----------------------------
* "Raw" = comes directly from a column of the question tagging CSV.
* "Derived" = computed deterministically by :mod:`utils.conversation_reports`.
"""

from __future__ import annotations

from typing import Any


# ---------------------------------------------------------------------------
# Metric documentation
# ---------------------------------------------------------------------------

METRICS: dict[str, dict[str, Any]] = {
    # -------------------------
    # Session activity
    # -------------------------
    "total_sessions": {
        "name": "Total sessions",
        "category": "Sessions",
        "definition": "Distinct conversations (session_id) in the loaded question log.",
        "formula": "`total_sessions = nunique(session_id)`",
        "provenance": "Derived from the `session_id` column by `session_analysis()`.",
        "caveats": [
            "Rows with a blank or missing session_id are grouped together as one session.",
        ],
        "used_in": ["Dashboard"],
    },
    "total_questions": {
        "name": "Total questions",
        "category": "Sessions",
        "definition": "Number of tagged questions (rows) in the loaded log.",
        "formula": "`total_questions = len(rows)`",
        "provenance": "Raw row count after blank lines are skipped.",
        "caveats": [],
        "used_in": ["Dashboard"],
    },
    "median_questions_per_session": {
        "name": "Median questions / session",
        "category": "Sessions",
        "definition": "Median number of questions asked in one session.",
        "formula": "Median of per-session question counts; the mean of the two middle values when the session count is even.",
        "provenance": "Derived by `session_analysis()`.",
        "caveats": [
            "Shown as — when no sessions are loaded.",
        ],
        "used_in": ["Dashboard"],
    },
    "follow_up_rate": {
        "name": "Follow-up rate",
        "category": "Sessions",
        "definition": "Share of questions that led to a follow-up question.",
        "formula": "`follow_up_rate = with / (with + without) * 100`",
        "provenance": "Raw flag `has_follow_up_questions`; only `True` counts as a follow-up.",
        "caveats": [
            "Values other than True / \"True\" (e.g. 1, \"yes\", \"true\") count as no follow-up.",
        ],
        "used_in": ["Dashboard"],
    },
    # -------------------------
    # Question types
    # -------------------------
    "intent_share": {
        "name": "Intent share",
        "category": "Question types",
        "definition": "Share of all questions tagged with each user intent.",
        "formula": "`intent_share = count(user_intent == x) / total_questions * 100`",
        "provenance": "Raw column `user_intent`; missing values are reported as `unknown`.",
        "caveats": [],
        "used_in": ["Dashboard"],
    },
    "complexity_share": {
        "name": "Complexity share",
        "category": "Question types",
        "definition": "Share of all questions at each complexity level.",
        "formula": "`complexity_share = count(question_complexity == x) / total_questions * 100`",
        "provenance": "Raw column `question_complexity` (trimmed); blank values are reported as `unknown`.",
        "caveats": [],
        "used_in": ["Dashboard"],
    },
    "learning_path_share": {
        "name": "Learning path share",
        "category": "Learning paths",
        "definition": "Share of questions with a learning path that belong to each path.",
        "formula": "`learning_path_share = count(path == x) / count(path not in {none, null}) * 100`",
        "provenance": "Raw column `learning_path` (trimmed).",
        "caveats": [
            "The denominator excludes questions without a learning path, so shares sum to 100% across paths only.",
            "Only the exact values `none` and `null` mean no path; other spellings are treated as path names.",
        ],
        "used_in": ["Dashboard"],
    },
    "dominant_intent": {
        "name": "Dominant intent",
        "category": "Learning paths",
        "definition": "The most frequent user intent among questions on a learning path.",
        "formula": "`dominant_intent = argmax(count(user_intent) | path)`; ties go to the intent seen first.",
        "provenance": "Derived by `path_intent_crosstab()`.",
        "caveats": [
            "With small paths, ties are common; the first-seen intent depends on row order in the file.",
        ],
        "used_in": ["Dashboard"],
    },
    # -------------------------
    # Satisfaction
    # -------------------------
    "difficulty_rate": {
        "name": "Session difficulty rate",
        "category": "Satisfaction",
        "definition": "Share of sessions where at least one question was flagged as difficult.",
        "formula": "`difficulty_rate = sessions_with_difficulties / total_sessions * 100`",
        "provenance": "Raw flag `has_difficulty`; only `True` counts.",
        "caveats": [
            "Shown as — when no sessions are loaded.",
        ],
        "used_in": ["Dashboard"],
    },
    "difficulty_types": {
        "name": "Difficulty types",
        "category": "Satisfaction",
        "definition": "Occurrences of each difficulty type across questions.",
        "formula": "`count(difficulty_type == x)` over rows with a difficulty_type",
        "provenance": "Raw column `difficulty_type`.",
        "caveats": [
            "Counts questions, not sessions.",
        ],
        "used_in": ["Dashboard"],
    },
}


# ---------------------------------------------------------------------------
# Page documentation
# ---------------------------------------------------------------------------

PAGES: dict[str, dict[str, Any]] = {
    "dashboard": {
        "title": "📊 Conversation Insight Dashboard",
        "what": [
            "A descriptive report over the loaded question log: session activity, question types, learning paths, and difficulties.",
        ],
        "data": [
            "Input dataset = the question tagging CSV loaded from the sidebar.",
            "Every metric is recomputed from the loaded rows; nothing is persisted.",
            "Example questions are sampled from the first five qualifying questions per category.",
        ],
        "key_metrics": [
            "total_sessions",
            "total_questions",
            "median_questions_per_session",
            "follow_up_rate",
            "intent_share",
            "learning_path_share",
            "dominant_intent",
            "difficulty_rate",
        ],
        "pitfalls": [
            "Intent and complexity shares use all questions; learning path shares use only questions with a path.",
            "Follow-up rate is per question while difficulty rate is per session.",
        ],
    },
}
