"""Helper functions for FastMCP integration."""

from typing import Any

from fastmcp import FastMCP

from docker_mcp.utils.safety import OperationSafety
from docker_mcp.version import __version__


def create_fastmcp_app(name: str = "docker-mcp") -> FastMCP:
    """Create and configure a FastMCP application instance.

    Args:
        name: Application name (default: "docker-mcp")

    Returns:
        Configured FastMCP instance
    """
    return FastMCP(
        name=name,
        version=__version__,
    )


def get_mcp_annotations(safety_level: OperationSafety) -> dict[str, Any]:
    """Get MCP annotations for a tool based on its safety level.

    Example:
        >>> get_mcp_annotations(OperationSafety.SAFE)
        {'readOnlyHint': True, 'destructiveHint': False}
    """
    return {
        "readOnlyHint": safety_level == OperationSafety.SAFE,
        "destructiveHint": safety_level == OperationSafety.DESTRUCTIVE,
    }
