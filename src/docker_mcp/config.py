"""Configuration management for Docker MCP."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from docker_mcp.endpoint.descriptor import EndpointIndicators
from docker_mcp.version import __version__


class DockerConfig(BaseSettings):
    """Docker daemon connection settings.

    The connection indicators are kept as the raw strings found in the
    environment. Interpreting them (scheme, TLS flag, port precedence) is the
    job of :func:`docker_mcp.endpoint.resolve`.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str | None = Field(
        default=None,
        description=(
            "Docker daemon endpoint (unix://, npipe://, tcp://, http://, https:// "
            "or host[:port]). Unset means the local default socket or pipe."
        ),
    )
    tls_verify: str | None = Field(
        default=None,
        description="Enable TLS verification; only '1' or 'true' enable it",
    )
    cert_path: str | None = Field(
        default=None,
        description="Directory containing ca.pem, cert.pem and key.pem (may start with ~)",
    )
    port: str | None = Field(
        default=None,
        description="Explicit port override, takes precedence over the port in DOCKER_HOST",
    )
    timeout: int = Field(
        default=60,
        description="Default timeout for Docker operations in seconds",
        gt=0,
    )

    def indicators(self) -> EndpointIndicators:
        """Return the connection indicators for endpoint resolution."""
        return EndpointIndicators(
            host=self.host,
            tls_verify=self.tls_verify,
            cert_path=self.cert_path,
            port=self.port,
        )


class ServerConfig(BaseSettings):
    """MCP server configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    server_name: str = Field(
        default="docker-mcp",
        description="MCP server name",
    )
    server_version: str = Field(
        default=__version__,
        description="MCP server version",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(
        default=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        description="Log format string for loguru",
    )
    json_logging: bool = Field(
        default=False,
        description="Enable JSON structured logging",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, level: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level_upper = level.upper()
        if level_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {level}. Must be one of {valid_levels}")
        return level_upper


class Config:
    """Main configuration container."""

    def __init__(self) -> None:
        """Initialize configuration from environment and .env file."""
        self.docker = DockerConfig()
        self.server = ServerConfig()

    def __repr__(self) -> str:
        """Return string representation of config."""
        return f"Config(docker={self.docker!r}, server={self.server!r})"
