"""Exception types shared across flo components."""


class FloError(Exception):
    """Base class for flo errors."""
    pass


class TransportError(FloError):
    """The MCP server process or connection could not be established."""
    pass


class ToolInvocationError(FloError):
    """A tool call failed, timed out, or returned an error payload."""

    def __init__(self, tool_name: str, message: str):
        super().__init__(f"tool {tool_name!r} failed: {message}")
        self.tool_name = tool_name
        self.message = message


class ParseError(FloError):
    """A tool response was not a well-formed result envelope."""
    pass
