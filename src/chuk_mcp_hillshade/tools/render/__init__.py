"""Render tools."""

from .api import register_render_tools

__all__ = ["register_render_tools"]
