"""
Question Lookup

The core flow behind every user query:
1. Call so_search to find relevant questions
2. Parse the structured JSON response
3. Pick the best question, preferring ones with embedded answers
4. If it has no embedded answers, fetch the accepted answer via get_content
5. Hand the question (or the raw result list) to the formatter
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..common.errors import ParseError, ToolInvocationError
from ..remote.client import StackOverflowClient, answer_ref, question_ref
from .formatter import NO_RESULTS_MESSAGE, format_question, format_results_list
from .interpreter import (
    answer_from_item,
    best_question,
    best_question_with_answers,
    extract_question_id,
    parse_response,
)
from .models import QuestionPayload, ResultEnvelope
from .tag_hints import detect_tag_hints

logger = logging.getLogger("flo.stackoverflow.lookup")


@dataclass
class LookupResult:
    """Outcome of one query"""
    query: str
    question: Optional[QuestionPayload] = None
    envelope: Optional[ResultEnvelope] = None
    error: Optional[str] = None  # ToolInvocationError message, query failed
    max_results: int = 10

    @property
    def found(self) -> bool:
        return self.question is not None

    @property
    def is_empty(self) -> bool:
        """Well-formed (or unparseable) response with nothing usable"""
        return self.error is None and self.question is None and (
            self.envelope is None or not self.envelope.items
        )

    def document(self, max_answers: int) -> str:
        """Markdown for the whole result; errors are reported by the caller."""
        if self.question is not None:
            return format_question(self.question, max_answers)
        if self.envelope is not None:
            return format_results_list(self.envelope, self.max_results)
        return NO_RESULTS_MESSAGE


class QuestionLookup:
    """
    Finds the best Stack Overflow question for a free-text query.

    Makes at most two sequential tool calls per query: the search, then an
    optional get_content for the accepted answer.
    """

    def __init__(self, client: StackOverflowClient, max_results: int = 10):
        self._client = client
        self._max_results = max_results

    async def lookup(self, query: str) -> LookupResult:
        """
        Search and select.

        Tool failures are reported in ``LookupResult.error``; unparseable
        responses become an empty result.
        """
        result = LookupResult(query=query, max_results=self._max_results)

        try:
            search_text = await self._client.search(query)
        except ToolInvocationError as e:
            logger.warning("Search failed: %s", e)
            result.error = str(e)
            return result

        envelope = await self._parse_or_recover(search_text)
        if envelope is None:
            return result
        result.envelope = envelope

        tag_hints = detect_tag_hints(query)

        # Strategy 1: a question whose answers came embedded in the search
        best = best_question_with_answers(envelope, tag_hints)
        if best is None:
            # Strategy 2: best question by score/tags, accepted answer fetched separately
            best = best_question(envelope, tag_hints)
            if best is not None and best.accepted_answer_id > 0:
                await self.fetch_accepted_answer(best)

        # Strategy 3 (best is None): the caller lists the raw results
        result.question = best
        return result

    async def _parse_or_recover(self, text: str) -> Optional[ResultEnvelope]:
        """
        Parse a search response.

        When it is not an envelope, look for a question id in the text and
        fetch that question instead.
        """
        if not text:
            return None
        try:
            return parse_response(text)
        except ParseError as e:
            logger.debug("Search response not an envelope: %s", e)

        question_id = extract_question_id(text)
        if not question_id:
            return None

        logger.debug("Recovering question %s from free-text response", question_id)
        try:
            return parse_response(await self._client.fetch_content(question_ref(question_id)))
        except (ToolInvocationError, ParseError) as e:
            logger.debug("Question %s recovery failed: %s", question_id, e)
            return None

    async def fetch_accepted_answer(self, question: QuestionPayload) -> bool:
        """
        Fetch the accepted answer and append it to ``question.answers``.

        Failures are logged and swallowed; the question is still shown.

        Returns:
            True if an answer was appended
        """
        try:
            text = await self._client.fetch_content(answer_ref(question.accepted_answer_id))
            envelope = parse_response(text)
        except (ToolInvocationError, ParseError) as e:
            logger.debug("Accepted answer %s unavailable: %s", question.accepted_answer_id, e)
            return False
        if not envelope.items:
            return False

        try:
            answer = answer_from_item(envelope.items[0])
        except ValueError as e:
            logger.debug("Accepted answer %s malformed: %s", question.accepted_answer_id, e)
            return False

        if not answer.answer_id:
            answer.answer_id = question.accepted_answer_id
        if answer.answer_id == question.accepted_answer_id:
            answer.is_accepted = True
        question.answers.append(answer)
        return True
