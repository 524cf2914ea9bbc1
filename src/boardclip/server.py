"""Boardclip MCP Server: entry point."""

from __future__ import annotations

from fastmcp import FastMCP

from .logging_config import create_logger, setup_logging
from .tools import TOOL_REGISTRY, register_router_tools

logger = create_logger(__name__)


def create_server() -> FastMCP:
    """Create and configure the boardclip MCP server."""
    mcp = FastMCP("boardclip")

    # Direct tools are always visible to the LLM
    for spec in TOOL_REGISTRY.values():
        if spec.direct:
            mcp.tool(spec.handler, name=spec.name, description=spec.description)

    register_router_tools(mcp)
    return mcp


def main() -> None:
    """CLI entry point."""
    setup_logging()
    server = create_server()
    logger.info(f"Starting boardclip MCP server with {len(TOOL_REGISTRY)} tools")
    server.run()


if __name__ == "__main__":
    main()
