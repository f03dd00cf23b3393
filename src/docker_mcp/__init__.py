"""Docker MCP: Docker daemon access over the Model Context Protocol."""

from docker_mcp.version import __version__

__all__ = ["__version__"]
