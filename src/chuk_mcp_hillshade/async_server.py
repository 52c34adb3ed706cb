#!/usr/bin/env python3
"""
Async Hillshade MCP Server using chuk-mcp-server

Relief shading of terrain height fields. Holds one rendering session
(height field + shading parameters) and stores rendered images in
chuk-artifacts for downstream display.

Storage is managed through chuk-mcp-server's built-in artifact store context.
"""

import logging

from chuk_mcp_server import ChukMCPServer

from .core.hillshade_manager import HillshadeManager
from .tools.discovery import register_discovery_tools
from .tools.render import register_render_tools
from .tools.session import register_session_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-hillshade")

# Create session manager instance
manager = HillshadeManager()

# Register all tool modules
register_discovery_tools(mcp, manager)
register_session_tools(mcp, manager)
register_render_tools(mcp, manager)

# Run the server
if __name__ == "__main__":
    logger.info("Starting Hillshade MCP Server...")
    logger.info("Storage: Using chuk-mcp-server artifact store context")
    mcp.run(stdio=True)
