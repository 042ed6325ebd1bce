"""Loading and export helpers for question tagging data."""

import csv
import io
import logging
import os
from pathlib import Path
from typing import Any, BinaryIO

import pandas as pd

logger = logging.getLogger(__name__)


class QuestionDataError(ValueError):
    """Raised when a question tagging file cannot be read."""


def maybe_load_dotenv() -> None:
    """Attempt to load environment variables from .env file."""
    try:
        from dotenv import load_dotenv
        load_dotenv(override=False)
    except Exception:
        return


def _decode_csv_bytes(raw: bytes) -> str:
    # utf-8-sig strips a leading BOM and reads plain UTF-8 unchanged.
    return raw.decode("utf-8-sig")


def load_question_csv(source: str | os.PathLike | bytes | BinaryIO) -> pd.DataFrame:
    """Parse a question tagging CSV into a DataFrame.

    *source* may be a filesystem path, raw bytes, or a binary file-like
    object (e.g. a Streamlit ``UploadedFile``).  The first row is the
    header, column types are inferred, and blank lines are skipped.  Only
    empty fields are missing; literal values such as ``"None"`` or ``"NA"``
    are kept as text.

    Raises
    ------
    QuestionDataError
        If the file is missing, empty, or not parseable as CSV.
    """
    try:
        if isinstance(source, (str, os.PathLike)):
            path = Path(os.path.expanduser(str(source)))
            if not path.is_file():
                raise QuestionDataError(f"Data file not found: {path}")
            text = _decode_csv_bytes(path.read_bytes())
        elif isinstance(source, (bytes, bytearray)):
            text = _decode_csv_bytes(bytes(source))
        else:
            text = _decode_csv_bytes(source.read())

        if not text.strip():
            raise QuestionDataError("Data file is empty")

        df = pd.read_csv(io.StringIO(text), skip_blank_lines=True, keep_default_na=False)
    except QuestionDataError as e:
        logger.warning("Failed to load question data: %s", e)
        raise
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        logger.warning("Failed to parse question data: %s", e)
        raise QuestionDataError(f"Failed to parse data: {e}") from e

    logger.info("Loaded %d question rows (%d columns)", len(df), len(df.columns))
    return df


def csv_bytes_any(rows: list[dict[str, Any]]) -> bytes:
    """Convert arbitrary dict rows to CSV bytes."""
    if not rows:
        return b""
    fields: list[str] = []
    for r in rows:
        for k in r.keys():
            if k not in fields:
                fields.append(k)
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=fields)
    writer.writeheader()
    for r in rows:
        writer.writerow({k: r.get(k) for k in fields})
    return buf.getvalue().encode("utf-8")


def format_number(value: float | None, digits: int = 1, suffix: str = "") -> str:
    """Format a possibly-undefined metric for display."""
    if value is None:
        return "—"
    return f"{value:.{digits}f}{suffix}"


def init_session_state(defaults: dict[str, Any]) -> None:
    """Initialize multiple session state keys with defaults if not already set.

    Example:
        init_session_state({
            "question_df": None,
            "question_source": "",
        })
    """
    import streamlit as st
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default
