"""Shared fixtures: sample so_search / get_content payloads and a fake MCP server."""

import io
import json

import pytest
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from rich.console import Console


def make_answer(answer_id=1, score=0, accepted=False, body="An answer", owner="answerer", **extra):
    data = {
        "owner": {"display_name": owner, "link": f"https://stackoverflow.com/users/{answer_id}"},
        "is_accepted": accepted,
        "last_activity_date": 1700000000,
        "answer_id": answer_id,
        "score": score,
        "body_markdown": body,
        "link": f"https://stackoverflow.com/a/{answer_id}",
        "title": "Question title",
    }
    data.update(extra)
    return data


def make_question(question_id=100, score=0, views=0, tags=None, answers=None, **extra):
    data = {
        "tags": tags if tags is not None else [],
        "owner": {"display_name": "asker", "link": "https://stackoverflow.com/users/42"},
        "is_answered": True,
        "view_count": views,
        "answer_count": len(answers) if answers else 0,
        "score": score,
        "accepted_answer_id": 0,
        "creation_date": 1258158000,
        "last_activity_date": 1700000000,
        "question_id": question_id,
        "body_markdown": f"Body of question {question_id}",
        "link": f"https://stackoverflow.com/questions/{question_id}",
        "title": f"Question {question_id}",
    }
    if answers is not None:
        data["answers"] = answers
    data.update(extra)
    return data


def make_item(data, item_type="Question", item_id=None):
    return {
        "Site": "Stack Overflow",
        "Type": item_type,
        "Id": item_id if item_id is not None else str(data.get("question_id", data.get("answer_id", ""))),
        "Data": data,
    }


def make_envelope(*items):
    return json.dumps({"Items": list(items), "Errors": []})


def make_server(search_response, contents=None, search_error=None):
    """
    In-memory stand-in for the Stack Overflow MCP server.

    Returns the server and the list of (tool, query) calls it received.

    Args:
        search_response: Text returned by so_search
        contents: get_content query -> text; unknown queries fail
        search_error: When set, so_search fails with this message
    """
    contents = contents or {}
    server = FastMCP(name="fake-stackoverflow")
    calls = []

    @server.tool(name="so_search")
    def so_search(query: str) -> str:
        calls.append(("so_search", query))
        if search_error:
            raise ToolError(search_error)
        return search_response

    @server.tool(name="get_content")
    def get_content(query: str) -> str:
        calls.append(("get_content", query))
        if query not in contents:
            raise ToolError(f"no content for {query}")
        return contents[query]

    return server, calls


@pytest.fixture
def consoles():
    """stdout/stderr consoles writing to memory, without colour"""
    out = Console(file=io.StringIO(), width=140, color_system=None, force_terminal=False)
    err = Console(file=io.StringIO(), width=140, color_system=None, force_terminal=False)
    return out, err
