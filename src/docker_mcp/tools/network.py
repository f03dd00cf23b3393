"""Network tools."""

from typing import Any

from docker.errors import APIError

from docker_mcp.docker_wrapper.client import DockerClientWrapper
from docker_mcp.tools.base import ToolDefinition
from docker_mcp.utils.errors import DockerOperationError
from docker_mcp.utils.logger import get_logger
from docker_mcp.utils.safety import OperationSafety

logger = get_logger(__name__)


def format_network_summary(network: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": network.get("Id"),
        "name": network.get("Name"),
        "driver": network.get("Driver"),
        "scope": network.get("Scope"),
    }


def create_list_networks_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the list_networks tool."""

    def list_networks() -> list[dict[str, Any]]:
        """List Docker networks."""
        try:
            networks = docker_client.client.api.networks()  # type: ignore[no-untyped-call]
        except APIError as e:
            logger.error(f"Failed to list networks: {e}")
            raise DockerOperationError(f"Failed to list networks: {e}") from e
        logger.info(f"Found {len(networks)} networks")
        return [format_network_summary(network) for network in networks]

    return (
        "list_networks",
        "List Docker networks",
        OperationSafety.SAFE,
        True,
        False,
        list_networks,
    )
