"""Conversation Insight Dashboard utilities."""

from utils.conversation_reports import (
    is_truthy,
    normalize_question_frame,
    session_analysis,
    intent_distribution,
    complexity_distribution,
    learning_path_distribution,
    path_intent_crosstab,
    follow_up_analysis,
    follow_up_chart_rows,
    difficulty_analysis,
    select_example_questions,
    build_dashboard_report,
    report_to_dict,
)
from utils.data_helpers import (
    QuestionDataError,
    maybe_load_dotenv,
    load_question_csv,
    csv_bytes_any,
    format_number,
    init_session_state,
)
from utils.charts import (
    questions_per_session_chart,
    category_pie_chart,
    follow_up_pie_chart,
    difficulty_types_chart,
)

__all__ = [
    # Reports
    "is_truthy",
    "normalize_question_frame",
    "session_analysis",
    "intent_distribution",
    "complexity_distribution",
    "learning_path_distribution",
    "path_intent_crosstab",
    "follow_up_analysis",
    "follow_up_chart_rows",
    "difficulty_analysis",
    "select_example_questions",
    "build_dashboard_report",
    "report_to_dict",
    # Data helpers
    "QuestionDataError",
    "maybe_load_dotenv",
    "load_question_csv",
    "csv_bytes_any",
    "format_number",
    "init_session_state",
    # Charts
    "questions_per_session_chart",
    "category_pie_chart",
    "follow_up_pie_chart",
    "difficulty_types_chart",
]
