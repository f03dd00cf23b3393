"""Loguru setup for the server and the diagnose command.

Console output always goes to stderr: stdout carries the MCP stdio protocol
and the rendered diagnostics report.
"""

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from docker_mcp.config import ServerConfig

LOG_FILE_ROTATION = "10 MB"
LOG_FILE_RETENTION = "7 days"


def _sink_options(config: "ServerConfig") -> dict[str, Any]:
    if config.json_logging:
        # Serialized records may be shipped elsewhere; keep variable values out
        return {"serialize": True, "diagnose": False}
    return {"format": config.log_format, "diagnose": True}


def setup_logger(config: "ServerConfig", log_file: Path | None = None) -> None:
    """Replace loguru's default handler with a stderr sink and an optional file sink.

    Args:
        config: Server configuration (level, format, JSON switch)
        log_file: Rotated, compressed log file written alongside stderr

    """
    logger.remove()
    options = _sink_options(config)

    logger.add(
        sys.stderr,
        level=config.log_level,
        colorize=not config.json_logging,
        backtrace=True,
        **options,
    )
    if log_file:
        logger.add(
            log_file,
            level=config.log_level,
            rotation=LOG_FILE_ROTATION,
            retention=LOG_FILE_RETENTION,
            compression="zip",
            backtrace=True,
            **options,
        )

    destination = f"stderr and {log_file}" if log_file else "stderr"
    logger.debug(f"{config.server_name} logging at {config.log_level} to {destination}")


def get_logger(name: str | None = None) -> Any:  # noqa: ARG001
    """Return the shared loguru logger; ``name`` is accepted for call-site symmetry."""
    return logger
