"""
flo

Stack Overflow in your terminal, over the Model Context Protocol.

Philosophy:
- One MCP connection per session, reused across questions
- The best answer-bearing question is picked deterministically
- Everything shown to the user is plain Markdown first, styling second

Usage:
    from flo.common import load_config
    from flo.remote import StackOverflowClient
    from flo.stackoverflow import QuestionLookup, format_question
    from flo.ui import Renderer, RenderConfig
"""

__version__ = "0.1.0"
