"""FastMCP server exposing the Docker operation catalog."""

import asyncio

from fastmcp import FastMCP

from docker_mcp.config import Config
from docker_mcp.docker_wrapper.client import DockerClientWrapper
from docker_mcp.tools import register_all_tools
from docker_mcp.utils.fastmcp_helpers import create_fastmcp_app
from docker_mcp.utils.logger import get_logger

logger = get_logger(__name__)


class DockerMCPServer:
    """MCP server for Docker operations.

    The Docker client is constructed by the caller from a resolved endpoint
    and passed in; the server never creates its own.
    """

    def __init__(self, config: Config, docker_client: DockerClientWrapper) -> None:
        """Initialize the server.

        Args:
            config: Server configuration
            docker_client: Docker client wrapper for the resolved endpoint
        """
        self.config = config
        self.docker_client = docker_client

        logger.info("Initializing Docker MCP server")
        self.app = create_fastmcp_app(name=config.server.server_name)

        registered_tools = register_all_tools(self.app, self.docker_client)
        self.tool_names = [name for names in registered_tools.values() for name in names]
        logger.info(f"Registered {len(self.tool_names)} tools")

    async def start(self) -> None:
        """Start the server. A failing daemon health check is logged, not raised."""
        logger.info(f"Starting Docker MCP server for {self.docker_client.descriptor}")
        try:
            health_status = await asyncio.to_thread(self.docker_client.health_check)
        except Exception as e:
            logger.warning(f"Docker daemon health check failed: {e}")
            return
        logger.info(f"Docker daemon is {health_status.get('status', 'unknown')}")

    async def stop(self) -> None:
        """Stop the server and release the Docker client."""
        logger.info("Stopping Docker MCP server")
        await asyncio.to_thread(self.docker_client.close)

    def get_app(self) -> FastMCP:
        """Get the underlying FastMCP application."""
        return self.app
