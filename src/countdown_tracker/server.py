#!/usr/bin/env python3
"""
MCP server for the countdown tracker.
This server exposes the running log, weight log, calendar and countdown as tools.
"""

from typing import Optional

from mcp.server.fastmcp import FastMCP

from countdown_tracker.config import Settings, get_settings
from countdown_tracker.logger import get_logger
from countdown_tracker.service import TrackerService, build_service
from countdown_tracker.tools import register_all_tools

logger = get_logger("countdown_tracker.server")


def create_server(service: Optional[TrackerService] = None, settings: Optional[Settings] = None) -> FastMCP:
    """Build the MCP server with every tool registered."""
    settings = settings or get_settings()
    mcp = FastMCP("Countdown Tracker MCP Server")
    register_all_tools(mcp, service or build_service(settings), settings)
    return mcp


def main() -> None:
    """Main function to start the countdown tracker MCP server."""
    logger.info("Starting countdown tracker MCP server")
    settings = get_settings()
    service = build_service(settings)
    try:
        create_server(service, settings).run(transport="stdio")
    finally:
        service.close()


if __name__ == "__main__":
    main()
