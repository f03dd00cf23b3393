"""Docker client construction from a resolved endpoint, plus a lazy wrapper."""

from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import docker
from docker import DockerClient
from docker.errors import DockerException
from docker.tls import TLSConfig
from loguru import logger

from docker_mcp.endpoint.descriptor import EndpointDescriptor, TransportKind
from docker_mcp.utils.errors import DockerConnectionError, DockerHealthCheckError

DEFAULT_TIMEOUT = 60


def build_tls_config(descriptor: EndpointDescriptor) -> TLSConfig | None:
    """Build the docker SDK TLS configuration for a tcp-tls endpoint.

    The server certificate is always verified. Without loaded TLS material
    the system CA bundle is used and no client certificate is presented.
    The SDK reads the certificate files by path, not from ``TLSMaterial`` bytes.
    """
    if not descriptor.uses_tls:
        return None
    material = descriptor.tls_material
    if material is None:
        return TLSConfig(verify=True)
    return TLSConfig(
        client_cert=(str(material.client_cert_path), str(material.client_key_path)),
        ca_cert=str(material.ca_cert_path),
        verify=True,
    )


def create_docker_client(
    descriptor: EndpointDescriptor,
    timeout: int = DEFAULT_TIMEOUT,
    version: str | None = None,
) -> DockerClient:
    """Create a docker SDK client for ``descriptor``.

    Without ``version`` the SDK asks the daemon for its API version while
    constructing the client, so an unreachable daemon fails here. With an
    explicit ``version`` construction performs no I/O.

    Raises:
        DockerException: If the endpoint is rejected, or if ``version`` is
            unset and the daemon is unreachable

    """
    logger.debug(f"Creating Docker client for {descriptor.base_url}")
    return docker.DockerClient(
        base_url=descriptor.base_url,
        version=version,
        timeout=timeout,
        tls=build_tls_config(descriptor),
    )


class DockerClientWrapper:
    """Docker client wrapper with lazy connection and health checks."""

    def __init__(self, descriptor: EndpointDescriptor, timeout: int = DEFAULT_TIMEOUT) -> None:
        """Initialize Docker client wrapper.

        Args:
            descriptor: Resolved daemon endpoint
            timeout: Per-call timeout for Docker operations in seconds

        """
        self.descriptor = descriptor
        self.timeout = timeout
        self._client: DockerClient | None = None
        logger.debug(f"Initialized DockerClientWrapper with base_url={descriptor.base_url}")

    @property
    def client(self) -> DockerClient:
        """Get Docker client with lazy initialization and health check.

        Raises:
            DockerConnectionError: If unable to connect to Docker daemon

        """
        if self._client is None:
            self._connect()
        assert self._client is not None  # _connect() raises on failure, so client is set
        return self._client

    def _connect(self) -> None:
        """Establish connection to Docker daemon with health check.

        Raises:
            DockerConnectionError: If connection fails

        """
        descriptor = self.descriptor
        logger.info(f"Connecting to Docker daemon at {descriptor.base_url}")

        if descriptor.transport is TransportKind.LOCAL_SOCKET:
            socket_path = Path(str(descriptor.path))
            if not socket_path.exists():
                logger.error(f"Docker socket not found: {socket_path}")
                raise DockerConnectionError(f"Docker socket not found: {socket_path}")

        try:
            client = create_docker_client(descriptor, self.timeout)
            client.ping()  # type: ignore[no-untyped-call]
        except DockerException as e:
            logger.error(f"Failed to connect to Docker daemon: {e}")
            raise DockerConnectionError(f"Cannot connect to Docker daemon: {e}") from e

        self._client = client
        logger.success("Successfully connected to Docker daemon")

    def health_check(self) -> dict[str, Any]:
        """Perform health check of Docker daemon.

        Returns:
            Health status dictionary with daemon info

        Raises:
            DockerHealthCheckError: If health check fails

        """
        try:
            self.client.ping()  # type: ignore[no-untyped-call]
            info = self.client.info()  # type: ignore[no-untyped-call]
            version = self.client.version()  # type: ignore[no-untyped-call]
        except DockerException as e:
            logger.error(f"Docker health check failed: {e}")
            raise DockerHealthCheckError(f"Health check failed: {e}") from e

        logger.debug("Docker health check passed")
        return {
            "status": "healthy",
            "endpoint": str(self.descriptor),
            "daemon_info": {
                "name": info.get("Name"),
                "server_version": version.get("Version"),
                "api_version": version.get("ApiVersion"),
                "os": info.get("OperatingSystem"),
                "architecture": info.get("Architecture"),
                "total_memory": info.get("MemTotal"),
                "cpus": info.get("NCPU"),
            },
            "containers": {
                "total": info.get("Containers"),
                "running": info.get("ContainersRunning"),
                "paused": info.get("ContainersPaused"),
                "stopped": info.get("ContainersStopped"),
            },
            "images": info.get("Images"),
        }

    def close(self) -> None:
        """Close the Docker client connection."""
        if self._client is not None:
            try:
                self._client.close()  # type: ignore[no-untyped-call]
                logger.debug("Docker client connection closed")
            except Exception as e:
                logger.warning(f"Error closing Docker client: {e}")
            finally:
                self._client = None

    @contextmanager
    def acquire(self) -> Generator[DockerClient, None, None]:
        """Context manager for Docker client access.

        Example:
            with wrapper.acquire() as client:
                containers = client.containers.list()

        """
        try:
            yield self.client
        except DockerException as e:
            logger.error(f"Docker operation failed: {e}")
            raise

    def __enter__(self) -> "DockerClientWrapper":
        """Enter context manager."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit context manager and close client."""
        self.close()

    def __repr__(self) -> str:
        """Return string representation."""
        status = "connected" if self._client is not None else "disconnected"
        return f"DockerClientWrapper(base_url={self.descriptor.base_url}, status={status})"
