"""
Terminal Rendering

rich turns the Markdown produced by the formatter into styled terminal
output (headings, bold, syntax-highlighted code blocks) and frames it in a
rounded panel. All styling comes from a RenderConfig handed to the
Renderer; there is no module-level style state.
"""

from dataclasses import dataclass
from typing import Optional

from rich import box
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.text import Text

from ..common.config import DisplayConfig

FOOTER = "  Powered by Stack Overflow via MCP"


@dataclass(frozen=True)
class RenderConfig:
    """Styling for one Renderer"""
    width: int = 100
    code_theme: str = "monokai"
    brand_color: str = "#FF6600"
    border_color: str = "#444444"
    error_color: str = "#FF4444"
    status_color: str = "#FFD700"
    success_color: str = "#00FF00"
    dim_color: str = "#888888"
    footer: str = FOOTER

    @classmethod
    def from_display(cls, display: DisplayConfig) -> "RenderConfig":
        return cls(width=display.width, code_theme=display.code_theme)


class Renderer:
    """
    Renders Markdown documents and one-line messages to the terminal.

    Args:
        config: Styling to apply
        console: Output console (stdout by default)
        err_console: Console for error panels (stderr by default)
    """

    def __init__(
        self,
        config: Optional[RenderConfig] = None,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        self.config = config or RenderConfig()
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def _panel_width(self) -> int:
        return self.config.width + 6

    def render_content(self, text: str) -> str:
        """
        Render Markdown inside a bordered panel, followed by the footer.

        Raises:
            ValueError: on empty content
        """
        if not text:
            raise ValueError("empty content")

        panel = Panel(
            Markdown(text, code_theme=self.config.code_theme),
            box=box.ROUNDED,
            border_style=self.config.border_color,
            padding=(1, 2),
            width=self._panel_width(),
        )
        footer = Text(self.config.footer, style=f"italic {self.config.dim_color}")

        with self.console.capture() as capture:
            self.console.print()
            self.console.print(panel)
            self.console.print()
            self.console.print(footer)
        return capture.get()

    def render_error(self, title: str, body: str) -> str:
        """Styled error panel."""
        panel = Panel(
            Text(f"✖ {title}\n\n{body}", style=f"bold {self.config.error_color}"),
            box=box.ROUNDED,
            border_style=self.config.error_color,
            padding=(1, 2),
            width=self._panel_width(),
        )
        with self.err_console.capture() as capture:
            self.err_console.print(panel)
        return capture.get()

    # ---------- printing helpers ---------- #

    def print_markdown(self, text: str) -> None:
        """Render and print; raw Markdown is printed when rendering is impossible."""
        try:
            rendered = self.render_content(text)
        except ValueError:
            rendered = text
        self.console.file.write(rendered)

    def print_error(self, title: str, body: str) -> None:
        self.err_console.file.write(self.render_error(title, body))

    def line(self, text: str) -> None:
        """Plain line, printed without markup."""
        self.console.print(Text(text))

    def banner(self, text: str) -> None:
        self.console.print(Text(text, style=f"bold {self.config.brand_color}"))

    def status(self, text: str) -> None:
        self.console.print(Text(text, style=f"bold {self.config.status_color}"))

    def success(self, text: str) -> None:
        self.console.print(Text(text, style=f"bold {self.config.success_color}"))

    def dim(self, text: str) -> None:
        self.console.print(Text(text, style=self.config.dim_color))

    def ask(self, prompt: str) -> str:
        """Read one line from the user; raises EOFError at end of input."""
        return self.console.input(Text(prompt, style=f"bold {self.config.brand_color}"))
