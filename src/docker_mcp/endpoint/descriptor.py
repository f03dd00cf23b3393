"""Value types produced and consumed by endpoint resolution."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

# TLS material file names expected inside the certificate directory
CA_CERT_FILE = "ca.pem"
CLIENT_CERT_FILE = "cert.pem"
CLIENT_KEY_FILE = "key.pem"
TLS_MATERIAL_FILES = (CA_CERT_FILE, CLIENT_CERT_FILE, CLIENT_KEY_FILE)

MIN_PORT = 1
MAX_PORT = 65535


class EndpointIndicators(BaseModel):
    """Raw connection intent, as found in the environment.

    Every field is the untouched string value (or None when unset).
    """

    model_config = ConfigDict(frozen=True)

    host: str | None = None
    tls_verify: str | None = None
    cert_path: str | None = None
    port: str | None = None


class TransportKind(str, Enum):
    """How the daemon is reached."""

    LOCAL_SOCKET = "local-socket"
    NAMED_PIPE = "named-pipe"
    TCP_PLAIN = "tcp-plain"
    TCP_TLS = "tcp-tls"

    @property
    def is_tcp(self) -> bool:
        return self in (TransportKind.TCP_PLAIN, TransportKind.TCP_TLS)


@dataclass(frozen=True)
class TLSMaterial:
    """CA certificate, client certificate and client key read from ``directory``.

    The bytes are what resolution and the certificates stage validated. The
    docker SDK only takes file paths, so clients built from this material
    re-read the files through the ``*_path`` properties when they connect; a
    file replaced after resolution is not detected.
    """

    directory: Path
    ca_cert: bytes = field(repr=False)
    client_cert: bytes = field(repr=False)
    client_key: bytes = field(repr=False)

    @property
    def ca_cert_path(self) -> Path:
        return self.directory / CA_CERT_FILE

    @property
    def client_cert_path(self) -> Path:
        return self.directory / CLIENT_CERT_FILE

    @property
    def client_key_path(self) -> Path:
        return self.directory / CLIENT_KEY_FILE


@dataclass(frozen=True)
class EndpointDescriptor:
    """A resolved, validated Docker daemon endpoint.

    Attributes:
        transport: Transport used to reach the daemon
        path: Socket path or pipe URL (local-socket / named-pipe only)
        host: Daemon host name or address (TCP only)
        port: Daemon port (TCP only)
        tls_material: Loaded client certificates (tcp-tls only). May be None for
            a TLS endpoint implied by an ``https://`` scheme whose certificates
            could not be loaded; the server is then verified against the system
            CA bundle and no client certificate is presented.
        cert_dir: Expanded certificate directory, when one was configured
        warnings: Degraded-mode warnings raised while resolving

    """

    transport: TransportKind
    path: str | None = None
    host: str | None = None
    port: int | None = None
    tls_material: TLSMaterial | None = None
    cert_dir: Path | None = None
    warnings: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.transport.is_tcp:
            if not self.host:
                raise ValueError(f"{self.transport.value} endpoint requires a host")
            if self.port is None or not MIN_PORT <= self.port <= MAX_PORT:
                raise ValueError(f"{self.transport.value} endpoint requires a port in 1-65535")
            if self.path is not None:
                raise ValueError(f"{self.transport.value} endpoint cannot carry a path")
        else:
            if not self.path:
                raise ValueError(f"{self.transport.value} endpoint requires a path")
            if self.host is not None or self.port is not None:
                raise ValueError(f"{self.transport.value} endpoint cannot carry host/port")
        if self.tls_material is not None and self.transport is not TransportKind.TCP_TLS:
            raise ValueError("TLS material only applies to tcp-tls endpoints")

    @property
    def base_url(self) -> str:
        """URL understood by the docker SDK for this endpoint."""
        if self.transport is TransportKind.LOCAL_SOCKET:
            return f"unix://{self.path}"
        if self.transport is TransportKind.NAMED_PIPE:
            return str(self.path)
        return f"tcp://{self.host}:{self.port}"

    @property
    def uses_tls(self) -> bool:
        return self.transport is TransportKind.TCP_TLS

    def __str__(self) -> str:
        if self.transport.is_tcp:
            return f"{self.transport.value} {self.host}:{self.port}"
        return f"{self.transport.value} {self.path}"
