"""Tool definition tuple and FastMCP registration."""

from typing import Any

from docker_mcp.utils.fastmcp_helpers import get_mcp_annotations
from docker_mcp.utils.logger import get_logger
from docker_mcp.utils.safety import OperationSafety

logger = get_logger(__name__)

# (name, description, safety_level, idempotent, open_world, func)
ToolDefinition = tuple[str, str, OperationSafety, bool, bool, Any]


def register_tools(app: Any, tools: list[ToolDefinition]) -> list[str]:
    """Register tool definitions on a FastMCP app.

    Args:
        app: FastMCP application instance
        tools: Tool definitions to register

    Returns:
        List of registered tool names
    """
    registered_names = []

    for name, description, safety_level, idempotent, open_world, func in tools:
        annotations = get_mcp_annotations(safety_level)
        annotations["idempotentHint"] = idempotent
        annotations["openWorldHint"] = open_world

        app.tool(name=name, description=description, annotations=annotations)(func)

        registered_names.append(name)
        logger.debug(f"Registered tool: {name} (safety: {safety_level.value})")

    return registered_names
