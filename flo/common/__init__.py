"""
flo Common Module

Shared configuration and error types.
"""

from .config import FloConfig, load_config
from .errors import FloError, TransportError, ToolInvocationError, ParseError

__all__ = [
    "FloConfig",
    "load_config",
    "FloError",
    "TransportError",
    "ToolInvocationError",
    "ParseError",
]
