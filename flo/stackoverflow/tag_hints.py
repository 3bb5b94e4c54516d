"""
Tag Hints

Maps words of a user query to Stack Overflow tags, so that questions in the
language the user asked about rank first.
"""

from types import MappingProxyType
from typing import List


LANGUAGE_TAGS = MappingProxyType({
    "go": "go", "golang": "go",
    "python": "python", "py": "python",
    "javascript": "javascript", "js": "javascript", "node": "node.js",
    "typescript": "typescript", "ts": "typescript",
    "java": "java",
    "c++": "c++", "cpp": "c++",
    "c#": "c#", "csharp": "c#",
    "ruby": "ruby", "rust": "rust", "swift": "swift",
    "kotlin": "kotlin", "php": "php",
    "bash": "bash", "shell": "bash",
    "sql": "sql", "mysql": "mysql", "postgres": "postgresql",
    "react": "reactjs", "docker": "docker",
    "kubernetes": "kubernetes", "k8s": "kubernetes",
    "git": "git",
})


def detect_tag_hints(query: str) -> List[str]:
    """
    Extract likely tags from a query.

    Returns:
        Canonical tags in the order their words appear, without duplicates
    """
    hints = []
    for word in (query or "").lower().split():
        tag = LANGUAGE_TAGS.get(word)
        if tag and tag not in hints:
            hints.append(tag)
    return hints
