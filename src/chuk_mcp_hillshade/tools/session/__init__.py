"""Session tools."""

from .api import register_session_tools

__all__ = ["register_session_tools"]
