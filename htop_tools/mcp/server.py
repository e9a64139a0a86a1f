# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0

"""
htop-tools MCP Server - Model Context Protocol server for the agent tool

Exposes ``system_tools`` over stdio so AI agents can call it directly.
"""

import asyncio
import logging
import sys
from typing import Any, Optional, Sequence

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from htop_tools.core.catalog import OperationCatalog
from htop_tools.core.config import ToolsConfig, load_config

from .tools import SystemToolsAdapter

logger = logging.getLogger("htop_tools.mcp.server")


def create_server(config: Optional[ToolsConfig] = None) -> Server:
    """
    Create and configure the htop-tools MCP server.

    Returns:
        Configured MCP Server instance
    """
    server = Server("htop-tools")
    adapter = SystemToolsAdapter(OperationCatalog(config or load_config()))

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List available tools."""
        schema = adapter.schema()
        return [
            Tool(
                name=schema["name"],
                description=schema["description"],
                inputSchema=schema["inputSchema"],
            )
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: Any) -> Sequence[TextContent]:
        """
        Handle tool calls from MCP client.

        Args:
            name: Tool name
            arguments: Tool arguments

        Returns:
            Tool execution result
        """
        if name != adapter.name:
            return [TextContent(type="text", text=f"❌ Unknown tool: {name}")]

        result = await adapter.execute(arguments)
        return [
            TextContent(type="text", text=segment["text"])
            for segment in result["content"]
        ]

    return server


async def run_server(config: Optional[ToolsConfig] = None):
    """Run the MCP server using stdio transport."""
    server = create_server(config)

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream, write_stream, server.create_initialization_options()
        )


def main(config: Optional[ToolsConfig] = None):
    """
    Main entry point for ``htop-tools mcp-serve``.
    """
    try:
        asyncio.run(run_server(config))
    except KeyboardInterrupt:
        pass  # Silent exit
    except Exception:
        logger.exception("MCP server crashed")
        sys.exit(1)


if __name__ == "__main__":
    main()
