"""
Stack Overflow Module

Interprets so_search / get_content responses and formats them for display.

Key Components:
- models: pydantic schema of the response envelope
- interpreter: parsing, ranking and best-question selection
- formatter: Markdown documents for questions, answers and result lists
- tag_hints: query word -> tag table used to bias ranking
- QuestionLookup: search -> select -> supplementary fetch

Pipeline:
1. Search with so_search
2. Parse the envelope and pick the best question
3. Fetch the accepted answer when none is embedded
4. Format the question and its answers as Markdown
"""

from .models import AnswerPayload, Owner, QuestionPayload, ResultEnvelope, ResultItem
from .interpreter import (
    answer_from_item,
    best_question,
    best_question_with_answers,
    extract_question_id,
    parse_response,
    sort_answers,
)
from .formatter import (
    NO_RESULTS_MESSAGE,
    format_answer_preview,
    format_number,
    format_question,
    format_question_header,
    format_results_list,
    format_single_answer,
)
from .tag_hints import LANGUAGE_TAGS, detect_tag_hints
from .lookup import LookupResult, QuestionLookup

__all__ = [
    "AnswerPayload",
    "Owner",
    "QuestionPayload",
    "ResultEnvelope",
    "ResultItem",
    "answer_from_item",
    "best_question",
    "best_question_with_answers",
    "extract_question_id",
    "parse_response",
    "sort_answers",
    "NO_RESULTS_MESSAGE",
    "format_answer_preview",
    "format_number",
    "format_question",
    "format_question_header",
    "format_results_list",
    "format_single_answer",
    "LANGUAGE_TAGS",
    "detect_tag_hints",
    "LookupResult",
    "QuestionLookup",
]
