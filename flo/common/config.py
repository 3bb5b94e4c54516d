"""
Configuration Management for flo

Loads configuration from ~/.flo/config.json and environment variables.
"""

import os
import json
import logging
from pathlib import Path
from dataclasses import dataclass, field

from dotenv import load_dotenv

logger = logging.getLogger("flo.config")

# Default config paths
CONFIG_DIR = Path.home() / ".flo"
CONFIG_PATH = CONFIG_DIR / "config.json"

DEFAULT_MCP_URL = "https://mcp.stackoverflow.com"


@dataclass
class ServerConfig:
    """MCP bridge process configuration"""
    command: str = "npx"
    url: str = DEFAULT_MCP_URL

    @property
    def args(self) -> list:
        """Arguments for the mcp-remote bridge (stdio <-> remote MCP server)"""
        return ["-y", "mcp-remote", self.url]


@dataclass
class TimeoutConfig:
    """Deadlines in seconds"""
    connect: float = 180.0  # first run may wait on a browser OAuth flow
    request: float = 120.0


@dataclass
class DisplayConfig:
    """Terminal output configuration"""
    max_answers: int = 5
    max_results: int = 10
    width: int = 100
    code_theme: str = "monokai"


@dataclass
class FloConfig:
    """Main flo configuration"""
    server: ServerConfig = field(default_factory=ServerConfig)
    timeouts: TimeoutConfig = field(default_factory=TimeoutConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


def _parse_server_config(data: dict) -> ServerConfig:
    """Parse server section from config dict"""
    server_data = data.get("server", {})
    return ServerConfig(
        command=server_data.get("command", "npx"),
        url=server_data.get("url", DEFAULT_MCP_URL),
    )


def _parse_timeout_config(data: dict) -> TimeoutConfig:
    """Parse timeouts section from config dict"""
    timeout_data = data.get("timeouts", {})
    return TimeoutConfig(
        connect=float(timeout_data.get("connect", 180.0)),
        request=float(timeout_data.get("request", 120.0)),
    )


def _parse_display_config(data: dict) -> DisplayConfig:
    """Parse display section from config dict"""
    display_data = data.get("display", {})
    return DisplayConfig(
        max_answers=int(display_data.get("max_answers", 5)),
        max_results=int(display_data.get("max_results", 10)),
        width=int(display_data.get("width", 100)),
        code_theme=display_data.get("code_theme", "monokai"),
    )


def load_config() -> FloConfig:
    """
    Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (a local .env file is honoured)
    2. Config file (~/.flo/config.json)
    3. Default values
    """
    load_dotenv()
    config = FloConfig()

    if CONFIG_PATH.exists():
        try:
            with open(CONFIG_PATH) as f:
                data = json.load(f)

            config.server = _parse_server_config(data)
            config.timeouts = _parse_timeout_config(data)
            config.display = _parse_display_config(data)
        except (json.JSONDecodeError, IOError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Failed to load config file %s: %s", CONFIG_PATH, e)
            config = FloConfig()

    if os.getenv("FLO_MCP_COMMAND"):
        config.server.command = os.getenv("FLO_MCP_COMMAND")
    if os.getenv("FLO_MCP_URL"):
        config.server.url = os.getenv("FLO_MCP_URL")

    # Numeric overrides (attribute, section, cast)
    _env_numeric_map = {
        "FLO_CONNECT_TIMEOUT": (config.timeouts, "connect", float),
        "FLO_REQUEST_TIMEOUT": (config.timeouts, "request", float),
        "FLO_MAX_ANSWERS": (config.display, "max_answers", int),
        "FLO_MAX_RESULTS": (config.display, "max_results", int),
        "FLO_WIDTH": (config.display, "width", int),
    }
    for env_var, (section, attr, cast) in _env_numeric_map.items():
        val = os.getenv(env_var)
        if not val:
            continue
        try:
            setattr(section, attr, cast(val))
        except ValueError:
            logger.warning("Ignoring %s=%r: not a valid %s", env_var, val, cast.__name__)

    if os.getenv("FLO_CODE_THEME"):
        config.display.code_theme = os.getenv("FLO_CODE_THEME")

    return config
