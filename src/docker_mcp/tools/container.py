"""Container tools.

Each tool is a thin passthrough to the Docker Engine API; lifecycle
semantics are the daemon's. Responses are trimmed to the fields a caller
usually needs.
"""

import time
from typing import Any

from docker.errors import APIError
from pydantic import BaseModel, Field

from docker_mcp.docker_wrapper.client import DockerClientWrapper
from docker_mcp.tools.base import ToolDefinition
from docker_mcp.utils.docker_error_handler import handle_docker_errors
from docker_mcp.utils.errors import DockerOperationError
from docker_mcp.utils.logger import get_logger
from docker_mcp.utils.safety import OperationSafety

logger = get_logger(__name__)

DEFAULT_STOP_TIMEOUT = 10
DEFAULT_LOG_TAIL = 100
# Follow mode streams for at most this long and this many lines
FOLLOW_WINDOW_SECONDS = 5
MAX_FOLLOW_LOG_LINES = 10000


class ContainerSummary(BaseModel):
    """Container as reported by the list endpoint."""

    id: str = Field(description="Container ID")
    name: str | None = Field(description="Primary container name")
    image: str | None = Field(description="Image the container was created from")
    state: str | None = Field(description="Container state (running, exited, ...)")
    status: str | None = Field(description="Human-readable status")
    ports: list[dict[str, Any]] = Field(description="Published ports")
    created: int | None = Field(description="Creation time (Unix timestamp)")


class ContainerState(BaseModel):
    """Short description of a container after a lifecycle call."""

    id: str = Field(description="Container ID")
    name: str | None = Field(description="Container name")
    state: str | None = Field(description="Container state")
    image: str | None = Field(default=None, description="Configured image")
    created: str | None = Field(default=None, description="Creation time (RFC 3339)")
    ports: dict[str, Any] | None = Field(default=None, description="Port bindings")


def format_container_summary(container: dict[str, Any]) -> dict[str, Any]:
    """Shape one entry of the container list endpoint."""
    names = container.get("Names")
    return ContainerSummary(
        id=container["Id"],
        name=names[0] if names else container.get("Name"),
        image=container.get("Image"),
        state=container.get("State"),
        status=container.get("Status"),
        ports=container.get("Ports") or [],
        created=container.get("Created"),
    ).model_dump()


def _container_state(info: dict[str, Any], detailed: bool = False) -> dict[str, Any]:
    extra: dict[str, Any] = {}
    if detailed:
        extra = {"image": (info.get("Config") or {}).get("Image"), "created": info.get("Created")}
    state = ContainerState(
        id=info["Id"],
        name=info.get("Name"),
        state=(info.get("State") or {}).get("Status"),
        **extra,
    )
    return state.model_dump(exclude_none=True)


def _exposed_port_specs(exposed_ports: dict[str, Any] | None) -> list[tuple[str, str]] | None:
    """Convert ``{"80/tcp": {}}`` into the SDK's ``[("80", "tcp")]`` form."""
    if not exposed_ports:
        return None
    specs = []
    for key in exposed_ports:
        port, _, protocol = key.partition("/")
        specs.append((port, protocol or "tcp"))
    return specs


def _create(
    docker_client: DockerClientWrapper,
    image: str,
    name: str | None,
    command: list[str] | None,
    entrypoint: list[str] | None,
    env: list[str] | None,
    exposed_ports: dict[str, Any] | None,
    host_config: dict[str, Any] | None,
    labels: dict[str, str] | None,
) -> str:
    result = docker_client.client.api.create_container(  # type: ignore[no-untyped-call]
        image=image,
        name=name,
        command=command,
        entrypoint=entrypoint,
        environment=env,
        ports=_exposed_port_specs(exposed_ports),
        host_config=host_config,
        labels=labels,
    )
    container_id: str = result["Id"]
    for warning in result.get("Warnings") or []:
        logger.warning(f"Docker warning creating container {container_id}: {warning}")
    return container_id


def create_list_containers_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the list_containers tool."""

    def list_containers(all: bool = False) -> list[dict[str, Any]]:  # noqa: A002
        """List Docker containers.

        Args:
            all: Show all containers (default shows just running)
        """
        try:
            containers = docker_client.client.api.containers(all=all)  # type: ignore[no-untyped-call]
        except APIError as e:
            logger.error(f"Failed to list containers: {e}")
            raise DockerOperationError(f"Failed to list containers: {e}") from e
        logger.info(f"Found {len(containers)} containers")
        return [format_container_summary(container) for container in containers]

    return (
        "list_containers",
        "List all Docker containers",
        OperationSafety.SAFE,
        True,
        False,
        list_containers,
    )


def create_create_container_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the create_container tool."""

    @handle_docker_errors(
        resource="image", operation="create container from", resource_id_param="image"
    )
    def create_container(  # noqa: PLR0913
        image: str,
        name: str | None = None,
        command: list[str] | None = None,
        entrypoint: list[str] | None = None,
        env: list[str] | None = None,
        exposed_ports: dict[str, Any] | None = None,
        host_config: dict[str, Any] | None = None,
        labels: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Create a container without starting it.

        Args:
            image: Image name (e.g. 'nginx:latest')
            name: Container name
            command: Command as an array (e.g. ['python', 'app.py'])
            entrypoint: Entrypoint as an array (e.g. ['/bin/bash', '-c'])
            env: Environment variables as KEY=VALUE strings
            exposed_ports: Exposed ports keyed by port/protocol (e.g. {'80/tcp': {}})
            host_config: Raw HostConfig (PortBindings, Binds, ...)
            labels: Container labels
        """
        logger.info(f"Creating container from image {image}")
        container_id = _create(
            docker_client, image, name, command, entrypoint, env, exposed_ports, host_config, labels
        )
        info = docker_client.client.api.inspect_container(container_id)  # type: ignore[no-untyped-call]
        return _container_state(info, detailed=True)

    return (
        "create_container",
        "Create a new Docker container",
        OperationSafety.MODERATE,
        False,
        False,
        create_container,
    )


def create_run_container_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the run_container tool."""

    @handle_docker_errors(
        resource="image", operation="run container from", resource_id_param="image"
    )
    def run_container(  # noqa: PLR0913
        image: str,
        name: str | None = None,
        command: list[str] | None = None,
        entrypoint: list[str] | None = None,
        env: list[str] | None = None,
        exposed_ports: dict[str, Any] | None = None,
        host_config: dict[str, Any] | None = None,
        labels: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Create and start a container.

        Takes the same arguments as create_container.
        """
        logger.info(f"Running container from image {image}")
        container_id = _create(
            docker_client, image, name, command, entrypoint, env, exposed_ports, host_config, labels
        )
        docker_client.client.api.start(container_id)  # type: ignore[no-untyped-call]
        info = docker_client.client.api.inspect_container(container_id)  # type: ignore[no-untyped-call]
        result = _container_state(info, detailed=True)
        result["ports"] = (info.get("NetworkSettings") or {}).get("Ports")
        return result

    return (
        "run_container",
        "Run a container (create and start). This is the preferred method for starting containers.",
        OperationSafety.MODERATE,
        False,
        False,
        run_container,
    )


def create_start_container_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the start_container tool."""

    @handle_docker_errors(resource="container", operation="start")
    def start_container(container_id: str) -> dict[str, Any]:
        """Start a stopped container.

        Args:
            container_id: Container ID or name
        """
        docker_client.client.api.start(container_id)  # type: ignore[no-untyped-call]
        info = docker_client.client.api.inspect_container(container_id)  # type: ignore[no-untyped-call]
        logger.info(f"Started container {container_id}")
        return _container_state(info)

    return (
        "start_container",
        "Start a stopped Docker container",
        OperationSafety.MODERATE,
        True,
        False,
        start_container,
    )


def create_stop_container_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the stop_container tool."""

    @handle_docker_errors(resource="container", operation="stop")
    def stop_container(container_id: str, timeout: int = DEFAULT_STOP_TIMEOUT) -> dict[str, Any]:
        """Stop a running container.

        Args:
            container_id: Container ID or name
            timeout: Seconds to wait before killing the container
        """
        docker_client.client.api.stop(container_id, timeout=timeout)  # type: ignore[no-untyped-call]
        info = docker_client.client.api.inspect_container(container_id)  # type: ignore[no-untyped-call]
        logger.info(f"Stopped container {container_id}")
        return _container_state(info)

    return (
        "stop_container",
        "Stop a running Docker container",
        OperationSafety.MODERATE,
        True,
        False,
        stop_container,
    )


def create_remove_container_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the remove_container tool."""

    @handle_docker_errors(resource="container", operation="remove")
    def remove_container(
        container_id: str,
        force: bool = False,
        volumes: bool = False,
    ) -> dict[str, Any]:
        """Remove a container.

        Args:
            container_id: Container ID or name
            force: Force removal of running container
            volumes: Remove associated anonymous volumes
        """
        docker_client.client.api.remove_container(  # type: ignore[no-untyped-call]
            container_id, v=volumes, force=force
        )
        logger.info(f"Removed container {container_id}")
        return {"status": "removed", "container_id": container_id}

    return (
        "remove_container",
        "Remove a Docker container",
        OperationSafety.DESTRUCTIVE,
        True,
        False,
        remove_container,
    )


def create_inspect_container_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the inspect_container tool."""

    @handle_docker_errors(resource="container", operation="inspect")
    def inspect_container(container_id: str) -> dict[str, Any]:
        """Get detailed information about a container."""
        info: dict[str, Any] = docker_client.client.api.inspect_container(  # type: ignore[no-untyped-call]
            container_id
        )
        return info

    return (
        "inspect_container",
        "Get detailed information about a container",
        OperationSafety.SAFE,
        True,
        False,
        inspect_container,
    )


def create_container_logs_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the container_logs tool."""

    @handle_docker_errors(resource="container", operation="get logs for")
    def container_logs(
        container_id: str,
        tail: int = DEFAULT_LOG_TAIL,
        follow: bool = False,
    ) -> dict[str, Any]:
        """Get logs from a container.

        Args:
            container_id: Container ID or name
            tail: Number of lines to show from the end of the logs
            follow: Keep collecting new output for a short window

        Note:
            Follow mode is bounded by FOLLOW_WINDOW_SECONDS and
            MAX_FOLLOW_LOG_LINES so a call always returns.
        """
        api = docker_client.client.api
        if not follow:
            raw = api.logs(container_id, stdout=True, stderr=True, tail=tail)  # type: ignore[no-untyped-call]
            logs = raw.decode("utf-8", errors="replace")
            return {"container_id": container_id, "logs": logs, "follow": False}

        deadline = int(time.time()) + FOLLOW_WINDOW_SECONDS
        stream = api.logs(  # type: ignore[no-untyped-call]
            container_id,
            stdout=True,
            stderr=True,
            tail=tail,
            stream=True,
            follow=True,
            until=deadline,
        )
        lines: list[str] = []
        for chunk in stream:
            lines.extend(chunk.decode("utf-8", errors="replace").splitlines())
            if len(lines) >= MAX_FOLLOW_LOG_LINES:
                logger.warning(f"Reached max follow lines ({MAX_FOLLOW_LOG_LINES}), stopping")
                break
        return {
            "container_id": container_id,
            "logs": "\n".join(lines[:MAX_FOLLOW_LOG_LINES]),
            "follow": True,
        }

    return (
        "container_logs",
        "Get logs from a container",
        OperationSafety.SAFE,
        False,
        False,
        container_logs,
    )


def create_container_tools(docker_client: DockerClientWrapper) -> list[ToolDefinition]:
    """Create every container tool."""
    return [
        create_list_containers_tool(docker_client),
        create_create_container_tool(docker_client),
        create_run_container_tool(docker_client),
        create_start_container_tool(docker_client),
        create_stop_container_tool(docker_client),
        create_remove_container_tool(docker_client),
        create_inspect_container_tool(docker_client),
        create_container_logs_tool(docker_client),
    ]
