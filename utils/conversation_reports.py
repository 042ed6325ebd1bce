"""Conversation report aggregations over tagged question logs.

Each report takes the raw question records (a DataFrame or an iterable of
dicts), normalizes them locally, and returns plain values: lists of dicts
or small dataclasses.  Nothing is cached between calls.

Category tables use the row shape ``{"name", "value", "percentage"}`` and are
sorted by count descending.  Ties keep the order in which each category first
appears in the input.  Ratios with a zero denominator are reported as
``None``.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

QUESTION_COLUMNS = [
    "session_id",
    "question",
    "user_intent",
    "question_complexity",
    "learning_path",
    "has_follow_up_questions",
    "has_difficulty",
    "difficulty_type",
]

NO_PATH_VALUES = ("none", "null")

EXAMPLE_INTENTS = ["problem_solving", "knowledge_seeking", "decision_making"]
EXAMPLE_COMPLEXITY_LEVELS = ["beginner", "intermediate", "advanced"]
EXAMPLE_FALLBACK = "No example available"
EXAMPLE_MIN_CHARS = 10
EXAMPLE_POOL_SIZE = 5

WITH_FOLLOW_UPS = "With Follow-ups"
WITHOUT_FOLLOW_UPS = "Without Follow-ups"


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

def is_truthy(value: Any) -> bool:
    """Boolean-like flag rule: native ``True`` or the exact string ``"True"``."""
    if isinstance(value, str):
        return value == "True"
    return isinstance(value, (bool, np.bool_)) and bool(value)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and np.isnan(value):
        return True
    return value is pd.NA or value is pd.NaT or (isinstance(value, str) and value == "")


def _session_key(value: Any) -> str:
    # Ids are compared as written; "a" and "a " are different sessions.
    if _is_missing(value):
        return ""
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        return str(int(value))
    return str(value)


def _intent_label(value: Any) -> str:
    return "unknown" if _is_missing(value) else str(value)


def _complexity_label(value: Any) -> str:
    if _is_missing(value):
        return "unknown"
    return str(value).strip() or "unknown"


def _learning_path_label(value: Any) -> str:
    # Whitespace-only paths trim to "" and are kept as a path name.
    return "none" if _is_missing(value) else str(value).strip()


def _difficulty_label(value: Any) -> str | None:
    return None if _is_missing(value) else str(value)


def _question_text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


NORMALIZED_ATTR = "questions_normalized"

_COLUMN_RULES = {
    "session_id": (_session_key, object),
    "question": (_question_text, object),
    "user_intent": (_intent_label, object),
    "question_complexity": (_complexity_label, object),
    "learning_path": (_learning_path_label, object),
    "difficulty_type": (_difficulty_label, object),
    "has_follow_up_questions": (is_truthy, bool),
    "has_difficulty": (is_truthy, bool),
}


def _is_normalized(records: Any) -> bool:
    return isinstance(records, pd.DataFrame) and bool(records.attrs.get(NORMALIZED_ATTR))


def normalize_question_frame(records: pd.DataFrame | Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """Return a normalized copy of the question records.

    Missing schema columns are added, category labels are defaulted and
    trimmed, and both flag columns are reduced to plain booleans with
    :func:`is_truthy`.  The input is never modified.

    The result is marked in ``DataFrame.attrs``; passing it back in returns
    a plain copy, so normalizing twice gives the same frame as normalizing
    once.
    """
    if _is_normalized(records):
        return records.copy()

    if isinstance(records, pd.DataFrame):
        df = records.copy()
    else:
        df = pd.DataFrame([dict(r) for r in (records or [])])

    for col in QUESTION_COLUMNS:
        if col not in df.columns:
            df[col] = None

    df = df.reset_index(drop=True)

    # Explicit dtype; None labels must stay None, not NaN.
    for col, (rule, dtype) in _COLUMN_RULES.items():
        df[col] = pd.Series([rule(v) for v in df[col].tolist()], index=df.index, dtype=dtype)

    df.attrs[NORMALIZED_ATTR] = True
    return df


def _frame(records: pd.DataFrame | Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    return records if _is_normalized(records) else normalize_question_frame(records)


# ---------------------------------------------------------------------------
# Small helpers
# ---------------------------------------------------------------------------

def _round_half_up(value: float, digits: int) -> float:
    """Round like a fixed-point display: exact halves go up (31.25 -> 31.3)."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def _pct(part: float, whole: float, digits: int = 1) -> float | None:
    if not whole:
        return None
    return _round_half_up(float(part) / float(whole) * 100, digits)


def _ordered_counts(values: pd.Series) -> pd.Series:
    """Counts per value, descending, ties in first-occurrence order."""
    if values.empty:
        return pd.Series(dtype="int64")
    counts = values.groupby(values, sort=False).size()
    return counts.sort_values(ascending=False, kind="mergesort")


def _category_rows(values: pd.Series, denominator: int) -> list[dict[str, Any]]:
    counts = _ordered_counts(values)
    return [
        {"name": str(name), "value": int(value), "percentage": _pct(value, denominator)}
        for name, value in counts.items()
    ]


def _session_sizes(df: pd.DataFrame) -> pd.Series:
    if df.empty:
        return pd.Series(dtype="int64")
    return df.groupby("session_id", sort=False).size()


def _median(values: list[int]) -> float | None:
    if not values:
        return None
    ordered = sorted(values)
    middle = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[middle - 1] + ordered[middle]) / 2
    return float(ordered[middle])


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------

@dataclass
class SessionSummary:
    """Session partition of the question log."""

    sessions_count: int = 0
    total_questions: int = 0
    questions_per_session: list[dict[str, Any]] = field(default_factory=list)
    distribution: list[dict[str, int]] = field(default_factory=list)
    median_questions_per_session: float | None = None


def session_analysis(records: pd.DataFrame | Iterable[Mapping[str, Any]]) -> SessionSummary:
    """Group questions by ``session_id`` and describe the session sizes.

    Returns
    -------
    SessionSummary
        ``distribution`` maps questions-per-session to the number of sessions
        with that many questions, ascending.  The median is rounded to two
        decimals and is ``None`` when there are no sessions.
    """
    df = _frame(records)
    sizes = _session_sizes(df)

    per_session = [{"id": str(sid), "count": int(n)} for sid, n in sizes.items()]

    distribution: list[dict[str, int]] = []
    if len(sizes):
        freq = sizes.value_counts().sort_index()
        distribution = [{"questions": int(q), "sessions": int(s)} for q, s in freq.items()]

    median = _median([row["count"] for row in per_session])

    summary = SessionSummary(
        sessions_count=len(per_session),
        total_questions=len(df),
        questions_per_session=per_session,
        distribution=distribution,
        median_questions_per_session=_round_half_up(median, 2) if median is not None else None,
    )
    logger.debug("session_analysis: %d sessions, %d questions", summary.sessions_count, summary.total_questions)
    return summary


def intent_distribution(records: pd.DataFrame | Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Share of all questions per ``user_intent``."""
    df = _frame(records)
    return _category_rows(df["user_intent"], len(df))


def complexity_distribution(records: pd.DataFrame | Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Share of all questions per ``question_complexity``."""
    df = _frame(records)
    return _category_rows(df["question_complexity"], len(df))


def _with_learning_path(df: pd.DataFrame) -> pd.DataFrame:
    return df[~df["learning_path"].isin(NO_PATH_VALUES)]


def learning_path_distribution(records: pd.DataFrame | Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Share per learning path, out of questions that have a learning path.

    Rows whose path is ``"none"`` or ``"null"`` are excluded from both the
    counts and the percentage denominator.
    """
    df = _with_learning_path(_frame(records))
    return _category_rows(df["learning_path"], len(df))


def path_intent_crosstab(records: pd.DataFrame | Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Intent counts per learning path with the dominant intent of each path.

    The dominant intent is the one with the highest count for the path.  When
    several intents tie, the one that appears first in the input wins.  Rows
    are sorted by path total, descending, ties in first-occurrence order.
    """
    df = _with_learning_path(_frame(records))
    if df.empty:
        return []

    rows: list[dict[str, Any]] = []
    for path, group in df.groupby("learning_path", sort=False):
        intent_counts = group.groupby("user_intent", sort=False).size()
        total = int(intent_counts.sum())
        # idxmax returns the first label holding the maximum.
        dominant = intent_counts.idxmax()
        dominant_count = int(intent_counts[dominant])
        rows.append(
            {
                "path": str(path),
                "total": total,
                "intents": {str(k): int(v) for k, v in intent_counts.items()},
                "dominant_intent": str(dominant),
                "dominant_intent_count": dominant_count,
                "dominant_intent_percentage": _pct(dominant_count, total),
            }
        )

    order = pd.Series([r["total"] for r in rows]).sort_values(ascending=False, kind="mergesort")
    return [rows[i] for i in order.index]


@dataclass
class FollowUpSummary:
    """Questions with and without follow-ups."""

    with_follow_ups: int = 0
    without_follow_ups: int = 0
    follow_up_rate: float | None = None


def follow_up_analysis(records: pd.DataFrame | Iterable[Mapping[str, Any]]) -> FollowUpSummary:
    """Count questions flagged ``has_follow_up_questions``.

    ``follow_up_rate`` is ``with / (with + without) * 100`` to one decimal,
    or ``None`` for an empty log.
    """
    df = _frame(records)
    with_count = int(df["has_follow_up_questions"].sum())
    without_count = int(len(df) - with_count)
    return FollowUpSummary(
        with_follow_ups=with_count,
        without_follow_ups=without_count,
        follow_up_rate=_pct(with_count, with_count + without_count),
    )


def follow_up_chart_rows(summary: FollowUpSummary) -> list[dict[str, Any]]:
    return [
        {"name": WITH_FOLLOW_UPS, "value": summary.with_follow_ups},
        {"name": WITHOUT_FOLLOW_UPS, "value": summary.without_follow_ups},
    ]


@dataclass
class DifficultySummary:
    """Difficulty types and the share of sessions that hit a difficulty."""

    type_counts: list[dict[str, Any]] = field(default_factory=list)
    sessions_with_difficulties: int = 0
    total_sessions: int = 0
    difficulty_rate: float | None = None


def difficulty_analysis(records: pd.DataFrame | Iterable[Mapping[str, Any]]) -> DifficultySummary:
    """Difficulty type counts and session difficulty rate.

    Questions without a ``difficulty_type`` are left out of the type counts.
    A session counts as having a difficulty when any of its questions has
    ``has_difficulty`` set.
    """
    df = _frame(records)

    types = df["difficulty_type"].dropna()
    type_counts = [{"name": str(k), "value": int(v)} for k, v in _ordered_counts(types).items()]

    total_sessions = int(df["session_id"].nunique()) if len(df) else 0
    with_difficulty = int(df.loc[df["has_difficulty"], "session_id"].nunique())

    return DifficultySummary(
        type_counts=type_counts,
        sessions_with_difficulties=with_difficulty,
        total_sessions=total_sessions,
        difficulty_rate=_pct(with_difficulty, total_sessions),
    )


@dataclass
class ExampleQuestions:
    """One sample question per headline intent and complexity level."""

    intents: dict[str, str] = field(default_factory=dict)
    complexity: dict[str, str] = field(default_factory=dict)


def _pick_example(candidates: list[str], rng: random.Random) -> str:
    if not candidates:
        return EXAMPLE_FALLBACK
    pool = candidates[:EXAMPLE_POOL_SIZE]
    return pool[rng.randrange(len(pool))]


def _examples_for(df: pd.DataFrame, col: str, labels: list[str], rng: random.Random) -> dict[str, str]:
    long_enough = df["question"].map(lambda q: isinstance(q, str) and len(q) > EXAMPLE_MIN_CHARS).astype(bool)
    out: dict[str, str] = {}
    for label in labels:
        candidates = df.loc[(df[col] == label) & long_enough, "question"].tolist()
        out[label] = _pick_example(candidates, rng)
    return out


def select_example_questions(
    records: pd.DataFrame | Iterable[Mapping[str, Any]],
    rng: random.Random | None = None,
) -> ExampleQuestions:
    """Pick a sample question for each headline intent and complexity level.

    Candidates are questions longer than ten characters.  The pick is uniform
    over at most the first five candidates, drawn from *rng* (a fresh
    ``random.Random()`` when omitted).  Categories without candidates get
    ``EXAMPLE_FALLBACK``.
    """
    df = _frame(records)
    rng = rng if rng is not None else random.Random()
    return ExampleQuestions(
        intents=_examples_for(df, "user_intent", EXAMPLE_INTENTS, rng),
        complexity=_examples_for(df, "question_complexity", EXAMPLE_COMPLEXITY_LEVELS, rng),
    )


# ---------------------------------------------------------------------------
# Bundle
# ---------------------------------------------------------------------------

@dataclass
class DashboardReport:
    sessions: SessionSummary
    intents: list[dict[str, Any]]
    complexity: list[dict[str, Any]]
    learning_paths: list[dict[str, Any]]
    path_intents: list[dict[str, Any]]
    follow_ups: FollowUpSummary
    difficulties: DifficultySummary
    examples: ExampleQuestions


def build_dashboard_report(
    records: pd.DataFrame | Iterable[Mapping[str, Any]],
    rng: random.Random | None = None,
) -> DashboardReport:
    """Run every report over one normalized copy of *records*."""
    df = _frame(records)
    report = DashboardReport(
        sessions=session_analysis(df),
        intents=intent_distribution(df),
        complexity=complexity_distribution(df),
        learning_paths=learning_path_distribution(df),
        path_intents=path_intent_crosstab(df),
        follow_ups=follow_up_analysis(df),
        difficulties=difficulty_analysis(df),
        examples=select_example_questions(df, rng=rng),
    )
    logger.debug(
        "build_dashboard_report: %d questions, %d intents, %d learning paths",
        len(df),
        len(report.intents),
        len(report.learning_paths),
    )
    return report


def report_to_dict(report: DashboardReport) -> dict[str, Any]:
    """Plain-dict form of a report, suitable for ``json.dumps``."""
    return asdict(report)
