"""
Response Interpreter

Deserializes so_search / get_content responses and picks the best question.

Ranking rules:
- Only items typed "Question" (or untyped) are candidates
- Tag hints narrow the candidates, unless nothing matches
- Score descending, then view count descending; ties keep envelope order
"""

import re
from typing import Iterable, List, Optional

from pydantic import ValidationError

from ..common.errors import ParseError
from .models import AnswerPayload, QuestionPayload, ResultEnvelope, ResultItem


# Question id references, in priority order. The server answers with
# SO_Q<id> tokens; the remaining patterns are a best-effort fallback.
QUESTION_ID_PATTERNS = (
    re.compile(r"SO_Q(\d+)"),
    re.compile(r"/questions/(\d+)"),
    re.compile(r"stackoverflow\.com/q/(\d+)"),
    re.compile(r"question\s*(?:id)?[:\s]+(\d{5,})", re.IGNORECASE),
)


def parse_response(text: str) -> ResultEnvelope:
    """
    Parse the JSON text returned by an MCP tool call.

    Raises:
        ParseError: if the text is not JSON, not an object, has no
            ``Items`` field, or carries fields of the wrong type.
    """
    try:
        return ResultEnvelope.model_validate_json(text)
    except ValidationError as e:
        raise ParseError(f"parse SO response: {e.error_count()} error(s): {e.errors()[0]['msg']}") from e


def _candidates(envelope: Optional[ResultEnvelope], tag_hints: Optional[Iterable[str]]) -> List[QuestionPayload]:
    """Question-typed payloads, narrowed by tag hints and ranked."""
    if envelope is None or not envelope.items:
        return []

    questions = [item.question for item in envelope.items if item.is_question]
    if not questions:
        return []

    hint_set = {h.lower() for h in (tag_hints or ())}
    if hint_set:
        matching = [
            q for q in questions
            if any(t.lower() in hint_set for t in q.tags)
        ]
        if matching:
            questions = matching

    # list.sort is stable: equal (score, views) keep envelope order
    questions.sort(key=lambda q: (-q.score, -q.view_count))
    return questions


def best_question(
    envelope: Optional[ResultEnvelope],
    tag_hints: Optional[Iterable[str]] = None,
) -> Optional[QuestionPayload]:
    """
    Return the highest-ranked question of the envelope.

    Args:
        envelope: Parsed tool response
        tag_hints: Lowercase tags like "go", "python"; questions tagged with
            any of them are preferred

    Returns:
        The best QuestionPayload, or None when no question-typed item exists
    """
    ranked = _candidates(envelope, tag_hints)
    return ranked[0] if ranked else None


def best_question_with_answers(
    envelope: Optional[ResultEnvelope],
    tag_hints: Optional[Iterable[str]] = None,
) -> Optional[QuestionPayload]:
    """Like best_question, but only considers questions carrying embedded answers."""
    for question in _candidates(envelope, tag_hints):
        if question.has_answers:
            return question
    return None


def sort_answers(answers: Iterable[AnswerPayload]) -> List[AnswerPayload]:
    """Accepted answer first, then score descending (stable on ties)."""
    return sorted(answers, key=lambda a: (not a.is_accepted, -a.score))


def answer_from_item(item: ResultItem) -> AnswerPayload:
    """
    Build an AnswerPayload from a get_content item.

    Falls back to the item Id when the payload has no answer_id.
    """
    answer = AnswerPayload.model_validate(item.data)
    if not answer.answer_id and item.id.isdigit():
        answer.answer_id = int(item.id)
    return answer


def extract_question_id(text: str) -> str:
    """
    Find the first Stack Overflow question id referenced in free text.

    Tries SO_Q<id> tokens, /questions/<id> paths, stackoverflow.com/q/<id>
    short links, then a loose "question: <5+ digits>" label. Returns "" when
    nothing matches.
    """
    for pattern in QUESTION_ID_PATTERNS:
        match = pattern.search(text or "")
        if match:
            return match.group(1)
    return ""
