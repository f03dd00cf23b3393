"""Docker operation catalog exposed as MCP tools."""

from typing import Any

from docker_mcp.docker_wrapper.client import DockerClientWrapper
from docker_mcp.tools.base import ToolDefinition, register_tools
from docker_mcp.tools.container import create_container_tools
from docker_mcp.tools.image import create_image_tools
from docker_mcp.tools.network import create_list_networks_tool
from docker_mcp.tools.volume import create_list_volumes_tool
from docker_mcp.utils.logger import get_logger

logger = get_logger(__name__)


def register_all_tools(app: Any, docker_client: DockerClientWrapper) -> dict[str, list[str]]:
    """Register every tool with the application.

    Args:
        app: FastMCP application instance
        docker_client: Docker client wrapper shared by all tools

    Returns:
        Dictionary mapping category to list of registered tool names
    """
    logger.info("Registering tools...")

    registered: dict[str, list[str]] = {
        "container": register_tools(app, create_container_tools(docker_client)),
        "image": register_tools(app, create_image_tools(docker_client)),
        "network": register_tools(app, [create_list_networks_tool(docker_client)]),
        "volume": register_tools(app, [create_list_volumes_tool(docker_client)]),
    }

    total_tools = sum(len(tools) for tools in registered.values())
    logger.info(f"Registered {total_tools} tools across {len(registered)} categories")
    return registered


__all__ = ["ToolDefinition", "register_all_tools", "register_tools"]
