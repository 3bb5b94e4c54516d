"""
flo Remote Module

MCP client for the Stack Overflow server.
"""

from .client import (
    StackOverflowClient,
    SEARCH_TOOL,
    CONTENT_TOOL,
    answer_ref,
    question_ref,
    extract_text,
)

__all__ = [
    "StackOverflowClient",
    "SEARCH_TOOL",
    "CONTENT_TOOL",
    "answer_ref",
    "question_ref",
    "extract_text",
]
