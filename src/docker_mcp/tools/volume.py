"""Volume tools."""

from typing import Any

from docker.errors import APIError

from docker_mcp.docker_wrapper.client import DockerClientWrapper
from docker_mcp.tools.base import ToolDefinition
from docker_mcp.utils.errors import DockerOperationError
from docker_mcp.utils.logger import get_logger
from docker_mcp.utils.safety import OperationSafety

logger = get_logger(__name__)


def format_volume_summary(volume: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": volume.get("Name"),
        "driver": volume.get("Driver"),
        "mountpoint": volume.get("Mountpoint"),
    }


def create_list_volumes_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the list_volumes tool."""

    def list_volumes() -> list[dict[str, Any]]:
        """List Docker volumes."""
        try:
            result = docker_client.client.api.volumes()  # type: ignore[no-untyped-call]
        except APIError as e:
            logger.error(f"Failed to list volumes: {e}")
            raise DockerOperationError(f"Failed to list volumes: {e}") from e
        # The daemon reports "Volumes": null when there are none
        volumes = result.get("Volumes") or []
        logger.info(f"Found {len(volumes)} volumes")
        return [format_volume_summary(volume) for volume in volumes]

    return (
        "list_volumes",
        "List Docker volumes",
        OperationSafety.SAFE,
        True,
        False,
        list_volumes,
    )
