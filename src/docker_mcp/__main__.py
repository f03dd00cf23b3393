"""Docker MCP entry point.

``docker-mcp serve`` runs the MCP server over stdio, ``docker-mcp diagnose``
checks the configured Docker connection. Both resolve the endpoint from the
DOCKER_* environment through the same resolver.
"""

import asyncio
import os
from pathlib import Path
from typing import Any

import typer

from docker_mcp.config import Config
from docker_mcp.diagnostics import ConnectionDiagnostics
from docker_mcp.diagnostics.render import render_report, render_resolution_error
from docker_mcp.docker_wrapper.client import DockerClientWrapper
from docker_mcp.endpoint import EndpointDescriptor, resolve
from docker_mcp.server import DockerMCPServer
from docker_mcp.utils.errors import ResolutionError
from docker_mcp.utils.logger import get_logger, setup_logger
from docker_mcp.version import __version__

SHUTDOWN_COMPLETE_MSG = "MCP server shutdown complete"

app = typer.Typer(
    name="docker-mcp",
    help="Docker MCP server and connection diagnostics",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"docker-mcp {__version__}")
        raise typer.Exit()


def resolve_endpoint(config: Config, logger: Any) -> EndpointDescriptor:
    """Resolve the configured endpoint, exiting with status 1 on failure."""
    try:
        return resolve(config.docker.indicators())
    except ResolutionError as e:
        logger.error(f"Cannot resolve Docker endpoint ({e.kind.value}): {e}")
        raise typer.Exit(code=1) from e


def run_stdio(logger: Any, server: DockerMCPServer) -> None:
    """Run the MCP server with stdio transport."""
    logger.info("Starting MCP server with stdio transport")

    asyncio.run(server.start())
    try:
        server.get_app().run(transport="stdio")
    finally:
        asyncio.run(server.stop())
        logger.info(SHUTDOWN_COMPLETE_MSG)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(  # noqa: ARG001
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Run the MCP server when no command is given."""
    if ctx.invoked_subcommand is None:
        serve()


@app.command()
def serve() -> None:
    """Run the MCP server over stdio."""
    config = Config()

    log_path = os.getenv("DOCKER_MCP_LOG_PATH")
    setup_logger(config.server, Path(log_path) if log_path else None)

    logger = get_logger(__name__)
    logger.info(f"Docker MCP Server v{__version__}")
    logger.info(f"Configuration: {config}")

    descriptor = resolve_endpoint(config, logger)
    docker_client = DockerClientWrapper(descriptor, timeout=config.docker.timeout)
    server = DockerMCPServer(config, docker_client)

    try:
        run_stdio(logger, server)
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")


@app.command()
def diagnose(
    verbose: bool = typer.Option(False, "--verbose", help="Show informational log output"),
) -> None:
    """Check the Docker connection configured through DOCKER_* variables."""
    config = Config()
    if verbose:
        setup_logger(config.server)
    else:
        # Keep the report readable: only warnings and errors reach the log
        setup_logger(config.server.model_copy(update={"log_level": "WARNING"}))

    try:
        descriptor = resolve(config.docker.indicators())
    except ResolutionError as e:
        render_resolution_error(e)
        raise typer.Exit(code=1) from e

    report = ConnectionDiagnostics(timeout=config.docker.timeout).run(descriptor)
    render_report(report)
    raise typer.Exit(code=0 if report.usable else 1)


if __name__ == "__main__":
    app()
