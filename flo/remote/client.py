"""
Stack Overflow MCP Client

Talks to the official Stack Overflow MCP server through the mcp-remote
bridge, spawned with npx and spoken to over stdio (JSON-RPC).

JSON-RPC flow when calling a tool:

    Client sends:   {"jsonrpc":"2.0","id":N,"method":"tools/call","params":{"name":"<tool>","arguments":{...}}}
    Server replies: {"jsonrpc":"2.0","id":N,"result":{"content":[{"type":"text","text":"..."}]}}

On first run mcp-remote walks the user through a browser OAuth flow and
caches the token for later sessions.

Usage:
    async with StackOverflowClient.from_config(config) as client:
        text = await client.search("reverse a string in go")
        answer = await client.fetch_content(answer_ref(1752414))
"""

import asyncio
import logging
import shutil
from typing import Any, Dict, Iterable, Optional

from fastmcp import Client
from fastmcp.client.transports import StdioTransport

from ..common.config import FloConfig
from ..common.errors import ToolInvocationError, TransportError

logger = logging.getLogger("flo.remote.client")

SEARCH_TOOL = "so_search"
CONTENT_TOOL = "get_content"


def question_ref(question_id: Any) -> str:
    """get_content reference for a question"""
    return f"SO_Q{question_id}"


def answer_ref(answer_id: Any) -> str:
    """get_content reference for an answer"""
    return f"SO_A{answer_id}"


def extract_text(content: Optional[Iterable[Any]]) -> str:
    """Join the text blocks of a tool result with newlines; other block types are skipped."""
    parts = [block.text for block in content or () if getattr(block, "type", None) == "text"]
    return "\n".join(parts)


class StackOverflowClient:
    """
    Async MCP client for the Stack Overflow tools.

    One connection is opened per session and reused for every query.
    Connecting and each tool call have independent deadlines.
    """

    def __init__(
        self,
        transport: Any,
        connect_timeout: float = 180.0,
        request_timeout: float = 120.0,
        command: Optional[str] = None,
    ):
        """
        Initialize the client.

        Args:
            transport: Anything fastmcp.Client accepts (a transport, a
                FastMCP server instance, a URL)
            connect_timeout: Seconds allowed for process start + handshake
            request_timeout: Seconds allowed for each tool call
            command: Executable the transport spawns; checked on PATH
                before connecting
        """
        self.connect_timeout = connect_timeout
        self.request_timeout = request_timeout
        self._command = command
        self._client = Client(transport, name="flo")

    @classmethod
    def from_config(cls, config: FloConfig) -> "StackOverflowClient":
        """Client spawning the mcp-remote bridge described by the config."""
        transport = StdioTransport(command=config.server.command, args=config.server.args)
        return cls(
            transport,
            connect_timeout=config.timeouts.connect,
            request_timeout=config.timeouts.request,
            command=config.server.command,
        )

    @property
    def is_connected(self) -> bool:
        return self._client.is_connected()

    async def connect(self) -> None:
        """
        Spawn the server and run the MCP initialize handshake.

        Raises:
            TransportError: command missing, process failure, or timeout
        """
        if self._command and shutil.which(self._command) is None:
            raise TransportError(f"{self._command} not found")

        logger.info("Connecting to MCP server (timeout %.0fs)", self.connect_timeout)
        try:
            await asyncio.wait_for(self._client.__aenter__(), timeout=self.connect_timeout)
        except asyncio.TimeoutError as e:
            await self._abort()
            raise TransportError(
                f"MCP initialize handshake timed out after {self.connect_timeout:.0f}s"
            ) from e
        except Exception as e:
            await self._abort()
            raise TransportError(f"failed to start MCP server: {e}") from e
        logger.info("Connected to MCP server")

    async def _abort(self) -> None:
        """Tear down a half-started session after a failed connect."""
        try:
            await self._client.close()
        except Exception as e:
            logger.debug("Cleanup after failed connect raised: %s", e)

    async def close(self) -> None:
        """Shut down the MCP session and the bridge subprocess."""
        if self._client.is_connected():
            await self._client.close()

    async def __aenter__(self) -> "StackOverflowClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def call_tool(self, tool_name: str, arguments: Dict[str, Any]) -> str:
        """
        Invoke a named tool and return its text content.

        Raises:
            ToolInvocationError: transport failure, timeout, or an error result
        """
        logger.debug("tools/call %s %s", tool_name, arguments)
        try:
            result = await self._client.call_tool(
                tool_name,
                arguments,
                timeout=self.request_timeout,
                raise_on_error=False,
            )
        except Exception as e:
            raise ToolInvocationError(tool_name, str(e) or type(e).__name__) from e

        text = extract_text(result.content)
        if result.is_error:
            raise ToolInvocationError(tool_name, text or "tool returned an error")
        return text

    async def search(self, query: str) -> str:
        """so_search: free-text search, envelope JSON with embedded answers"""
        return await self.call_tool(SEARCH_TOOL, {"query": query})

    async def fetch_content(self, ref: str) -> str:
        """get_content: a single question (SO_Q<id>) or answer (SO_A<id>)"""
        return await self.call_tool(CONTENT_TOOL, {"query": ref})
