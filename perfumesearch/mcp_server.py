"""Minimal MCP server exposing the perfume search tool."""
import asyncio
import json
import logging
import sys
from importlib.metadata import version, PackageNotFoundError
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import ServerCapabilities, Tool, ToolsCapability, TextContent

from perfumesearch import tool as perfume_tool
from perfumesearch.config import Settings, load_settings

logger = logging.getLogger(__name__)

server = Server("perfumesearch-mcp")

# Resolved once in main(); None means tool calls load settings themselves.
_settings: Optional[Settings] = None


def _tool(name: str, description: str, schema: Dict[str, Any]) -> Tool:
    return Tool(name=name, description=description, inputSchema=schema)


TOOLS: List[Tool] = [
    _tool(perfume_tool.TOOL_NAME, perfume_tool.TOOL_DESCRIPTION, perfume_tool.INPUT_SCHEMA),
]


async def _dispatch_tool(name: str, args: Dict[str, Any]) -> Any:
    if name == perfume_tool.TOOL_NAME:
        envelope = await perfume_tool.execute(args, settings=_settings)
        return envelope.to_dict()
    raise ValueError(f"Unknown tool '{name}'")


@server.list_tools()
async def list_tools() -> List[Tool]:
    return TOOLS


@server.call_tool()
async def call_tool(name: str, arguments: Dict[str, Any]):
    try:
        result = await _dispatch_tool(name, arguments or {})
        text = json.dumps(result, indent=2, sort_keys=True, default=str)
    except Exception as exc:  # surfaced to MCP client
        text = f"Error: {exc}"
    return [TextContent(type="text", text=text)]


async def main():
    global _settings
    # stdout carries the protocol; keep logs on stderr.
    logging.basicConfig(level=logging.INFO, stream=sys.stderr)
    _settings = load_settings()

    try:
        server_version = version("perfumesearch")
    except PackageNotFoundError:  # pragma: no cover - local dev
        server_version = "dev"

    init_opts = InitializationOptions(
        server_name="perfumesearch-mcp",
        server_version=server_version,
        capabilities=ServerCapabilities(tools=ToolsCapability()),
    )

    logger.info("Serving %s against index %r", perfume_tool.TOOL_NAME, _settings.index_name)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, init_opts)


if __name__ == "__main__":
    asyncio.run(main())
