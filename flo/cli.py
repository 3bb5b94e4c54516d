"""
flo command line

  One-shot:     flo "how to reverse a string in go"
                flo ask "how to reverse a string in go"
  Interactive:  flo   (or: flo ask)

One MCP connection is opened at start-up and reused for every question of
the session.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from . import __version__
from .common.config import FloConfig, load_config
from .common.errors import TransportError
from .remote.client import StackOverflowClient
from .stackoverflow.formatter import (
    NO_RESULTS_MESSAGE,
    format_answer_preview,
    format_question_header,
    format_single_answer,
)
from .stackoverflow.interpreter import sort_answers
from .stackoverflow.lookup import QuestionLookup
from .stackoverflow.models import AnswerPayload
from .ui.render import RenderConfig, Renderer

logger = logging.getLogger("flo.cli")

EXIT_WORDS = ("quit", "exit", "q")

NODE_INSTALL_HINT = (
    "flo requires Node.js (npx).\n\n"
    "  macOS:   brew install node\n"
    "  Ubuntu:  sudo apt install nodejs npm\n"
    "  Windows: choco install nodejs"
)


class Session:
    """
    One interactive session over a connected client.

    Args:
        client: Connected StackOverflowClient
        renderer: Terminal renderer
        config: Display limits come from ``config.display``
        interactive: Offer the answer selection menu instead of printing
            every answer in one document
    """

    def __init__(
        self,
        client: StackOverflowClient,
        renderer: Renderer,
        config: FloConfig,
        interactive: bool = True,
    ):
        self.renderer = renderer
        self.max_answers = config.display.max_answers
        self.interactive = interactive
        self.lookup = QuestionLookup(client, max_results=config.display.max_results)
        self.last_error: Optional[str] = None

    async def _read(self, prompt: str) -> Optional[str]:
        """Read a line without blocking the event loop; None at end of input."""
        try:
            return await asyncio.to_thread(self.renderer.ask, prompt)
        except EOFError:
            return None

    async def ask(self, query: str) -> bool:
        """
        Search, pick and display the best question for a query.

        Returns:
            False when the user asked to quit the session
        """
        self.renderer.status(f"\n🔍 Searching for: {query!r}\n")
        result = await self.lookup.lookup(query)
        self.last_error = result.error

        if result.error:
            self.renderer.print_error("Search failed", result.error)
            return True
        if result.is_empty:
            self.renderer.print_error("No results", NO_RESULTS_MESSAGE)
            return True
        if not result.found or not self.interactive:
            self.renderer.print_markdown(result.document(self.max_answers))
            return True

        question = result.question
        self.renderer.print_markdown(format_question_header(question))
        if question.answers:
            return await self.answer_selection_loop(question.answers)

        if question.link:
            self.renderer.dim(f"  View on Stack Overflow: {question.link}\n")
        return True

    async def answer_selection_loop(self, answers: List[AnswerPayload]) -> bool:
        """
        Numbered answer menu: pick one to read it, then go back, move on to a
        new question, or quit.

        Returns:
            False when the user asked to quit the session
        """
        ranked = sort_answers(answers)
        if self.max_answers > 0:
            ranked = ranked[:self.max_answers]

        while True:
            for i, answer in enumerate(ranked):
                self.renderer.line(format_answer_preview(answer, i))

            choice = await self._read(f"Select an answer (1-{len(ranked)}, Enter to skip): ")
            if choice is None:
                return False
            choice = choice.strip().lower()
            if not choice or choice == "n":
                return True
            if choice in EXIT_WORDS:
                return False
            if not choice.isdigit() or not 1 <= int(choice) <= len(ranked):
                self.renderer.dim(f"  Pick a number between 1 and {len(ranked)}")
                continue

            index = int(choice) - 1
            self.renderer.print_markdown(format_single_answer(ranked[index], index))

            self.renderer.dim("  [Enter] back to answers  |  [n] new question  |  [q] quit")
            nav = await self._read("")
            if nav is None:
                return False
            nav = nav.strip().lower()
            if nav == "n":
                return True
            if nav in EXIT_WORDS:
                return False

    async def repl(self) -> None:
        """Keep asking questions until the user quits."""
        while True:
            line = await self._read("❓ Ask: ")
            if line is None:
                break
            query = line.strip()
            if not query:
                continue
            if query.lower() in EXIT_WORDS:
                break
            if not await self.ask(query):
                break
            self.renderer.line("")

        self.renderer.dim("\n👋 Goodbye!")


def report_transport_error(renderer: Renderer, error: TransportError, config: FloConfig) -> None:
    """Fatal connection failure, with install guidance when npx is missing."""
    if "not found" in str(error) and config.server.command == "npx":
        renderer.print_error("Node.js not found", NODE_INSTALL_HINT)
    else:
        renderer.print_error("Connection failed", str(error))


async def run(
    query: str,
    config: FloConfig,
    renderer: Renderer,
    interactive: bool = True,
    client: Optional[StackOverflowClient] = None,
) -> int:
    """
    Connect, then answer one query (one-shot) or run the REPL.

    Returns:
        Process exit status
    """
    renderer.banner("⚡ flo: Stack Overflow in your terminal")
    renderer.line("")
    renderer.status("⏳ Connecting to Stack Overflow MCP server...")
    renderer.dim("  (first run may open a browser for Stack Overflow login)")

    client = client or StackOverflowClient.from_config(config)
    try:
        await client.connect()
    except TransportError as e:
        logger.error("Connection failed: %s", e)
        report_transport_error(renderer, e, config)
        return 1

    try:
        renderer.success("✅ Connected!")
        renderer.line("")
        session = Session(client, renderer, config, interactive=interactive)

        if query:
            await session.ask(query)
            return 1 if session.last_error else 0

        await session.repl()
        return 0
    finally:
        await client.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flo",
        description="Search Stack Overflow from your terminal.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            '  flo "how to reverse a string in go"\n'
            '  flo ask "python list comprehension with condition"\n'
            "  flo            (interactive)"
        ),
    )
    parser.add_argument(
        "query",
        nargs="*",
        help="Question to search for; omit it for interactive mode",
    )
    parser.add_argument(
        "--max-answers",
        type=int,
        default=None,
        help="Answers to show per question (0 = all)",
    )
    parser.add_argument(
        "--max-results",
        type=int,
        default=None,
        help="Results to list when no single best question is found (0 = all)",
    )
    parser.add_argument(
        "--no-select",
        action="store_true",
        help="Print all answers at once instead of the answer menu",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    parser.add_argument("--version", action="version", version=f"flo {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    config = load_config()
    if args.max_answers is not None:
        config.display.max_answers = args.max_answers
    if args.max_results is not None:
        config.display.max_results = args.max_results

    words = list(args.query)
    if words and words[0] == "ask":
        words = words[1:]
    query = " ".join(words).strip()

    renderer = Renderer(RenderConfig.from_display(config.display))
    interactive = not args.no_select and sys.stdin.isatty()

    try:
        return asyncio.run(run(query, config, renderer, interactive=interactive))
    except KeyboardInterrupt:
        renderer.dim("\n👋 Goodbye!")
        return 130


if __name__ == "__main__":
    sys.exit(main())
