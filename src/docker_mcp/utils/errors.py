"""Custom exceptions for Docker MCP."""

from enum import Enum


class DockerMCPError(Exception):
    """Base exception for all Docker MCP errors."""


class DockerConnectionError(DockerMCPError):
    """Raised when unable to connect to Docker daemon."""


class DockerHealthCheckError(DockerMCPError):
    """Raised when Docker health check fails."""


class DockerOperationError(DockerMCPError):
    """Raised when a Docker operation fails."""


class ContainerNotFound(DockerMCPError):  # noqa: N818
    """Raised when a container is not found."""


class ImageNotFound(DockerMCPError):  # noqa: N818
    """Raised when an image is not found."""


class ResolutionErrorKind(str, Enum):
    """Classification of endpoint resolution failures."""

    MISSING_CERT_PATH = "missing_cert_path"
    CERTIFICATE_LOAD_FAILED = "certificate_load_failed"
    HOME_DIRECTORY_UNRESOLVABLE = "home_directory_unresolvable"
    INVALID_ENDPOINT = "invalid_endpoint"


class ResolutionError(DockerMCPError):
    """Raised when connection indicators cannot be turned into an endpoint.

    Subclasses set ``kind`` so callers can render guidance without matching
    on message text.
    """

    kind: ResolutionErrorKind = ResolutionErrorKind.INVALID_ENDPOINT


class MissingCertPathError(ResolutionError):
    """Raised when TLS verification is requested without a certificate directory."""

    kind = ResolutionErrorKind.MISSING_CERT_PATH


class CertificateLoadError(ResolutionError):
    """Raised when TLS material cannot be read under explicit verification."""

    kind = ResolutionErrorKind.CERTIFICATE_LOAD_FAILED


class HomeDirectoryUnresolvableError(ResolutionError):
    """Raised when a ``~`` certificate path cannot be expanded."""

    kind = ResolutionErrorKind.HOME_DIRECTORY_UNRESOLVABLE


class InvalidEndpointError(ResolutionError):
    """Raised when the endpoint URI or port override is malformed."""

    kind = ResolutionErrorKind.INVALID_ENDPOINT
