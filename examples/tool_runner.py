"""
Shared helper for running chuk-mcp-hillshade MCP tools directly from Python.

Provides a ToolRunner class that registers all MCP tools and sets up
an in-memory artifact store, without requiring a full MCP transport layer.
Demo scripts use this to call tools as plain async functions.

Usage:
    from tool_runner import ToolRunner

    async def main():
        runner = ToolRunner()
        result = await runner.run("hillshade_status")
        print(result)
"""

from __future__ import annotations

import json
import os
from typing import Any

from chuk_mcp_hillshade.core.hillshade_manager import HillshadeManager
from chuk_mcp_hillshade.tools.discovery import register_discovery_tools
from chuk_mcp_hillshade.tools.render import register_render_tools
from chuk_mcp_hillshade.tools.session import register_session_tools


class _MiniMCP:
    """Minimal MCP server that captures tools registered via @mcp.tool."""

    def __init__(self) -> None:
        self._tools: dict[str, Any] = {}

    def tool(self) -> Any:
        def decorator(fn: Any) -> Any:
            self._tools[fn.__name__] = fn
            return fn

        return decorator

    def get_tool(self, name: str) -> Any:
        return self._tools[name]


def _init_artifact_store() -> Any:
    """Initialize an in-memory artifact store for demo use."""
    os.environ.setdefault("CHUK_ARTIFACTS_PROVIDER", "memory")
    from chuk_artifacts import ArtifactStore
    from chuk_mcp_server import set_global_artifact_store

    store = ArtifactStore(storage_provider="memory", session_provider="memory")
    set_global_artifact_store(store)
    return store


class ToolRunner:
    """
    Run chuk-mcp-hillshade MCP tools directly from Python.

    All 7 tools are registered and callable via run(tool_name, **kwargs).
    Returns parsed JSON by default. Use run_text() for human-readable output.
    """

    def __init__(self) -> None:
        self.store = _init_artifact_store()
        self._mcp = _MiniMCP()
        self.manager = HillshadeManager()
        register_discovery_tools(self._mcp, self.manager)
        register_session_tools(self._mcp, self.manager)
        register_render_tools(self._mcp, self.manager)

    @property
    def tool_names(self) -> list[str]:
        return list(self._mcp._tools.keys())

    async def run(self, tool_name: str, **kwargs: Any) -> dict[str, Any]:
        """Call a tool by name and return parsed JSON."""
        fn = self._mcp.get_tool(tool_name)
        raw = await fn(**kwargs)
        return json.loads(raw)

    async def run_text(self, tool_name: str, **kwargs: Any) -> str:
        """Call a tool by name with output_mode='text' and return plaintext."""
        fn = self._mcp.get_tool(tool_name)
        return await fn(output_mode="text", **kwargs)
