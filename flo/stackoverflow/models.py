"""
Stack Overflow MCP Response Schema

Both MCP tools (so_search, get_content) answer with the same envelope:

    {
      "Items": [
        {
          "Site": "Stack Overflow",
          "Type": "Question",
          "Id":   "1752414",
          "Data": { ... question/answer fields ... }
        }
      ],
      "Errors": []
    }

"Data" carries tags, score, body_markdown, owner and, for so_search results,
an embedded "answers" array. Missing or null fields take their zero value;
unknown fields are ignored.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator


QUESTION_TYPE = "Question"


class _Record(BaseModel):
    """Base for wire records: unknown keys ignored, nulls treated as absent."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


def _without_nulls(value: Any) -> Any:
    """null list entries are skipped, like absent fields"""
    if isinstance(value, list):
        return [v for v in value if v is not None]
    return value


# ============================================================================
# Payloads
# ============================================================================

class Owner(_Record):
    """Author of a question or answer"""
    display_name: str = ""
    link: str = ""


class AnswerPayload(_Record):
    """A single answer, embedded in a question or fetched via get_content"""
    owner: Owner = Field(default_factory=Owner)
    is_accepted: bool = False
    last_activity_date: int = 0
    answer_id: int = 0
    score: int = 0
    body_markdown: str = ""
    link: str = ""
    title: str = ""


class QuestionPayload(_Record):
    """Rich payload for a question, with inline answers when the server embeds them"""
    tags: List[str] = Field(default_factory=list)
    owner: Owner = Field(default_factory=Owner)
    is_answered: bool = False
    view_count: int = 0
    answer_count: int = 0
    score: int = 0
    accepted_answer_id: int = 0
    creation_date: int = 0
    last_activity_date: int = 0
    question_id: int = 0
    body_markdown: str = ""
    link: str = ""
    title: str = ""
    answers: List[AnswerPayload] = Field(default_factory=list)

    @field_validator("tags", "answers", mode="before")
    @classmethod
    def _drop_null_entries(cls, value: Any) -> Any:
        return _without_nulls(value)

    @property
    def has_answers(self) -> bool:
        return len(self.answers) > 0


# ============================================================================
# Envelope
# ============================================================================

class ResultItem(_Record):
    """One search result. ``data`` keeps the raw mapping; ``question`` is its validated view."""
    site: str = Field(default="", alias="Site")
    type: str = Field(default="", alias="Type")
    id: str = Field(default="", alias="Id")
    data: Dict[str, Any] = Field(default_factory=dict, alias="Data")

    _question: QuestionPayload = PrivateAttr(default_factory=QuestionPayload)

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @model_validator(mode="after")
    def _validate_question(self) -> "ResultItem":
        self._question = QuestionPayload.model_validate(self.data)
        return self

    @property
    def question(self) -> QuestionPayload:
        return self._question

    @property
    def is_question(self) -> bool:
        """Items with no type are assumed to be questions"""
        return self.type in ("", QUESTION_TYPE)


class ResultEnvelope(_Record):
    """Top-level envelope returned by so_search / get_content"""
    items: List[ResultItem] = Field(..., alias="Items")
    errors: List[Any] = Field(default_factory=list, alias="Errors")

    @field_validator("items", mode="before")
    @classmethod
    def _drop_null_items(cls, value: Any) -> Any:
        return _without_nulls(value)
