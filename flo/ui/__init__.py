"""
flo UI Module

Terminal rendering with rich.
"""

from .render import Renderer, RenderConfig

__all__ = ["Renderer", "RenderConfig"]
