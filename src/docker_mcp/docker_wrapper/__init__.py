"""Docker SDK client construction and lifecycle."""

from docker_mcp.docker_wrapper.client import (
    DockerClientWrapper,
    build_tls_config,
    create_docker_client,
)

__all__ = ["DockerClientWrapper", "build_tls_config", "create_docker_client"]
