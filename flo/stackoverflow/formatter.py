"""
Document Formatter

Renders questions, answers and search result lists to Markdown for the
terminal renderer. Output is a pure function of the payload.
"""

import html
from datetime import datetime, timezone
from typing import List

from .interpreter import sort_answers
from .models import AnswerPayload, QuestionPayload, ResultEnvelope


NO_RESULTS_MESSAGE = "No results found."
PREVIEW_LENGTH = 80


def decode_html(text: str) -> str:
    """Unescape HTML entities (&#39; -> ', &amp; -> &) that Stack Overflow embeds."""
    return html.unescape(text or "")


def format_number(n: int) -> str:
    """Human-friendly number with thousands separators (178410 -> "178,410")."""
    return f"{n:,}"


def format_date(timestamp: int) -> str:
    """Epoch seconds as "Jan 2, 2006" (UTC); "" when out of datetime's range."""
    try:
        dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return ""
    return f"{dt:%b} {dt.day}, {dt.year}"


def _format_tags(tags: List[str], sep: str) -> str:
    return sep.join(f"`{t}`" for t in tags)


def _answer_label(answer: AnswerPayload, index: int) -> str:
    label = f"### Answer {index + 1}"
    if answer.is_accepted:
        label += "  ✅ Accepted"
    if answer.score > 0:
        label += f"  (Score: {answer.score})"
    return label


def _answer_block(answer: AnswerPayload, index: int) -> List[str]:
    lines = [_answer_label(answer, index) + "\n\n"]
    if answer.owner.display_name:
        lines.append(f"By **{decode_html(answer.owner.display_name)}**\n\n")
    lines.append(decode_html(answer.body_markdown) + "\n\n")
    return lines


def format_question_header(q: QuestionPayload) -> str:
    """
    Title, meta line, tags, attribution, body and link of a question.

    Used on its own before interactive answer selection, and as the head of
    format_question.
    """
    if q is None:
        raise ValueError("question payload is required")

    parts = [f"# {decode_html(q.title)}\n\n"]

    meta = (
        f"Score: **{q.score}**  |  Views: **{format_number(q.view_count)}**"
        f"  |  Answers: **{q.answer_count}**"
    )
    if q.is_answered:
        meta += "  |  ✅ Answered"
    parts.append(meta + "\n\n")

    if q.tags:
        parts.append(_format_tags(q.tags, "  ") + "\n\n")

    if q.owner.display_name:
        asked = f"Asked by **{decode_html(q.owner.display_name)}**"
        asked_on = format_date(q.creation_date) if q.creation_date > 0 else ""
        if asked_on:
            asked += f" on {asked_on}"
        parts.append(asked + "\n\n")

    parts.append("---\n\n")
    parts.append(decode_html(q.body_markdown) + "\n\n")

    if q.link:
        parts.append(f"🔗 {q.link}\n\n")

    return "".join(parts)


def format_question(q: QuestionPayload, max_answers: int) -> str:
    """
    Build a Markdown document for a question and its embedded answers.

    Args:
        q: The question to render
        max_answers: Answers to show; <= 0 or more than available shows all

    Returns:
        Markdown text ready for the renderer
    """
    parts = [format_question_header(q)]

    if q.answers:
        answers = sort_answers(q.answers)
        shown = max_answers
        if shown <= 0 or shown > len(answers):
            shown = len(answers)

        parts.append("---\n\n")
        parts.append(f"## Top {shown} Answer(s)\n\n")

        for i in range(shown):
            parts.extend(_answer_block(answers[i], i))
            if i < shown - 1:
                parts.append("---\n\n")

        if len(answers) > shown:
            parts.append(f"\n*({len(answers) - shown} more answers on Stack Overflow)*\n")

    elif q.answer_count > 0 and q.link:
        # get_content responses carry no answer bodies; point at the site
        answer_word = "answer" if q.answer_count == 1 else "answers"
        parts.append("---\n\n")
        parts.append(f"📝 **{q.answer_count} {answer_word}** available on Stack Overflow:\n")
        parts.append(f"{q.link}\n")

    return "".join(parts)


def format_single_answer(answer: AnswerPayload, index: int = 0) -> str:
    """Markdown for one answer, as shown after picking it from the menu."""
    parts = _answer_block(answer, index)
    if answer.link:
        parts.append(f"🔗 {answer.link}\n")
    return "".join(parts)


def format_answer_preview(answer: AnswerPayload, index: int) -> str:
    """One-line preview of an answer for the selection menu."""
    first_line = ""
    for line in decode_html(answer.body_markdown).splitlines():
        if line.strip():
            first_line = line.strip()
            break
    if len(first_line) > PREVIEW_LENGTH:
        first_line = first_line[:PREVIEW_LENGTH - 3].rstrip() + "..."

    preview = f"{index + 1}."
    if answer.is_accepted:
        preview += " ✅"
    preview += f" [{answer.score:+d}]"
    if answer.owner.display_name:
        preview += f" {decode_html(answer.owner.display_name)}:"
    if first_line:
        preview += f" {first_line}"
    return preview


def format_results_list(envelope: ResultEnvelope, max_results: int) -> str:
    """
    Markdown listing of the top search results, in envelope order.

    Used when no single best question can be identified.
    """
    if envelope is None or not envelope.items:
        return NO_RESULTS_MESSAGE

    shown = max_results
    if shown <= 0 or shown > len(envelope.items):
        shown = len(envelope.items)

    parts = ["# Stack Overflow Search Results\n\n"]
    for i, item in enumerate(envelope.items[:shown], 1):
        q = item.question
        answered = " ✅" if q.is_answered else ""
        tags = f" | {_format_tags(q.tags, ' ')}" if q.tags else ""
        parts.append(
            f"{i}. **{decode_html(q.title)}**{answered}  \n"
            f"   Score: {q.score} | Answers: {q.answer_count}{tags}  \n"
            f"   {q.link}\n\n"
        )

    return "".join(parts)
