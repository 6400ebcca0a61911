"""MCP tools for the countdown tracker."""

from countdown_tracker.tools.activities import register_activity_tools
from countdown_tracker.tools.reports import register_report_tools

__all__ = [
    "register_activity_tools",
    "register_report_tools",
    "register_all_tools",
]


def register_all_tools(mcp, service, settings):
    """Register all MCP tools with the server."""
    register_activity_tools(mcp, service)
    register_report_tools(mcp, service, settings)
