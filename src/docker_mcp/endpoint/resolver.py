"""Turn connection indicators into a concrete Docker daemon endpoint.

Resolution is a pure function of the indicators and the home directory
variables, apart from reading TLS material from disk. Failures are raised as
:class:`~docker_mcp.utils.errors.ResolutionError` subclasses before any
daemon contact is attempted.

Known limitation: IPv6 literals in ``DOCKER_HOST`` are not supported, the
host and port are split on the first ``:``.
"""

import os
import platform
from collections.abc import Mapping
from pathlib import Path

from docker_mcp.endpoint.descriptor import (
    CA_CERT_FILE,
    CLIENT_CERT_FILE,
    CLIENT_KEY_FILE,
    MAX_PORT,
    MIN_PORT,
    EndpointDescriptor,
    EndpointIndicators,
    TLSMaterial,
    TransportKind,
)
from docker_mcp.utils.errors import (
    CertificateLoadError,
    HomeDirectoryUnresolvableError,
    InvalidEndpointError,
    MissingCertPathError,
)
from docker_mcp.utils.logger import get_logger
from docker_mcp.utils.messages import (
    ERROR_CERTIFICATE_LOAD,
    ERROR_EMPTY_HOST,
    ERROR_HOME_UNRESOLVABLE,
    ERROR_INVALID_PORT,
    ERROR_MISSING_CERT_PATH,
    WARNING_CERTIFICATE_LOAD,
    WARNING_HOME_UNRESOLVABLE,
)

logger = get_logger(__name__)

UNIX_SCHEME = "unix://"
NPIPE_SCHEME = "npipe://"
HTTPS_SCHEME = "https://"
TCP_SCHEMES = ("tcp://", "http://", HTTPS_SCHEME)

DEFAULT_UNIX_SOCKET = "/var/run/docker.sock"
DEFAULT_NAMED_PIPE = "npipe:////./pipe/docker_engine"

DEFAULT_PLAIN_PORT = 2375
DEFAULT_TLS_PORT = 2376

# DOCKER_TLS_VERIFY values that enable verification (case-sensitive)
TLS_VERIFY_TRUE_VALUES = frozenset({"1", "true"})

HOME_VARIABLES = ("HOME", "USERPROFILE")


def is_tls_verify_enabled(value: str | None) -> bool:
    """Return True only for the literal flag values ``"1"`` and ``"true"``."""
    return value in TLS_VERIFY_TRUE_VALUES


def default_endpoint() -> EndpointDescriptor:
    """Return the platform's local default endpoint.

    Returns:
        Named pipe descriptor on Windows, Unix socket descriptor elsewhere
        (Linux, macOS and WSL all use the socket)
    """
    if platform.system().lower() == "windows":
        return EndpointDescriptor(transport=TransportKind.NAMED_PIPE, path=DEFAULT_NAMED_PIPE)
    return EndpointDescriptor(transport=TransportKind.LOCAL_SOCKET, path=DEFAULT_UNIX_SOCKET)


def resolve(
    indicators: EndpointIndicators,
    environ: Mapping[str, str] | None = None,
) -> EndpointDescriptor:
    """Resolve connection indicators into a validated endpoint descriptor.

    Args:
        indicators: Raw connection indicators
        environ: Environment used to find the home directory for ``~``
            expansion (defaults to ``os.environ``)

    Returns:
        The resolved endpoint

    Raises:
        MissingCertPathError: TLS verification requested without a certificate directory
        HomeDirectoryUnresolvableError: ``~`` path with no home directory under
            explicit TLS verification
        CertificateLoadError: Certificates unreadable under explicit TLS verification
        InvalidEndpointError: Malformed host or port

    """
    env = os.environ if environ is None else environ
    tls_verify = is_tls_verify_enabled(indicators.tls_verify)
    cert_path = indicators.cert_path or None

    if tls_verify and cert_path is None:
        raise MissingCertPathError(ERROR_MISSING_CERT_PATH)

    host_uri = indicators.host or None
    if host_uri is None:
        descriptor = default_endpoint()
        logger.debug(f"DOCKER_HOST not set, using local default: {descriptor}")
        return descriptor

    if host_uri.startswith(UNIX_SCHEME):
        socket_path = host_uri[len(UNIX_SCHEME) :]
        if not socket_path:
            raise InvalidEndpointError(ERROR_EMPTY_HOST.format(host_uri))
        return EndpointDescriptor(transport=TransportKind.LOCAL_SOCKET, path=socket_path)

    if host_uri.startswith(NPIPE_SCHEME):
        return EndpointDescriptor(transport=TransportKind.NAMED_PIPE, path=host_uri)

    host, url_port, https = _split_tcp_uri(host_uri)
    tls_in_effect = https or tls_verify
    port = _select_port(indicators.port or None, url_port, tls_in_effect)

    if not tls_in_effect:
        descriptor = EndpointDescriptor(transport=TransportKind.TCP_PLAIN, host=host, port=port)
        logger.debug(f"Resolved Docker endpoint: {descriptor}")
        return descriptor

    tls_material = None
    cert_dir = None
    warnings: list[str] = []
    if cert_path is not None:
        tls_material, cert_dir = _load_tls_material(cert_path, env, tls_verify, warnings)

    for warning in warnings:
        logger.warning(warning)

    descriptor = EndpointDescriptor(
        transport=TransportKind.TCP_TLS,
        host=host,
        port=port,
        tls_material=tls_material,
        cert_dir=cert_dir,
        warnings=tuple(warnings),
    )
    logger.debug(
        f"Resolved Docker endpoint: {descriptor} "
        f"(client certificates: {'loaded' if tls_material else 'none'})"
    )
    return descriptor


def _split_tcp_uri(host_uri: str) -> tuple[str, str | None, bool]:
    """Split a TCP-style URI into host, URL port string and https flag.

    Anything from the first ``/`` after the authority on is ignored.
    """
    remainder = host_uri
    https = False
    for scheme in TCP_SCHEMES:
        if host_uri.startswith(scheme):
            remainder = host_uri[len(scheme) :]
            https = scheme == HTTPS_SCHEME
            break

    authority = remainder.split("/", 1)[0]
    host, _, url_port = authority.partition(":")
    if not host:
        raise InvalidEndpointError(ERROR_EMPTY_HOST.format(host_uri))
    return host, url_port or None, https


def _select_port(explicit_port: str | None, url_port: str | None, tls_in_effect: bool) -> int:
    """Apply port precedence: explicit override, then URL port, then protocol default."""
    if explicit_port is not None:
        return _parse_port(explicit_port)
    if url_port is not None:
        return _parse_port(url_port)
    return DEFAULT_TLS_PORT if tls_in_effect else DEFAULT_PLAIN_PORT


def _parse_port(value: str) -> int:
    stripped = value.strip()
    if not stripped.isdecimal():
        raise InvalidEndpointError(ERROR_INVALID_PORT.format(value))
    port = int(stripped)
    if not MIN_PORT <= port <= MAX_PORT:
        raise InvalidEndpointError(ERROR_INVALID_PORT.format(value))
    return port


def expand_cert_path(cert_path: str, environ: Mapping[str, str]) -> Path | None:
    """Expand a leading ``~`` using HOME, then USERPROFILE.

    Returns:
        Absolute certificate directory, or None when the path needs a home
        directory and none is set
    """
    if cert_path.startswith("~"):
        home = next((environ[name] for name in HOME_VARIABLES if environ.get(name)), None)
        if home is None:
            return None
        cert_path = home + cert_path[1:]
    return Path(cert_path).absolute()


def read_tls_material(directory: Path) -> TLSMaterial:
    """Read ca.pem, cert.pem and key.pem from ``directory``.

    Raises:
        OSError: If any of the files is missing or unreadable
    """
    return TLSMaterial(
        directory=directory,
        ca_cert=(directory / CA_CERT_FILE).read_bytes(),
        client_cert=(directory / CLIENT_CERT_FILE).read_bytes(),
        client_key=(directory / CLIENT_KEY_FILE).read_bytes(),
    )


def _load_tls_material(
    cert_path: str,
    environ: Mapping[str, str],
    explicit: bool,
    warnings: list[str],
) -> tuple[TLSMaterial | None, Path | None]:
    """Load TLS material, failing under explicit verification and degrading otherwise.

    Explicit verification (DOCKER_TLS_VERIFY) treats every problem as fatal.
    TLS implied only by an ``https://`` scheme records a warning and continues
    without client certificates.
    """
    cert_dir = expand_cert_path(cert_path, environ)
    if cert_dir is None:
        if explicit:
            raise HomeDirectoryUnresolvableError(ERROR_HOME_UNRESOLVABLE)
        warnings.append(WARNING_HOME_UNRESOLVABLE)
        return None, None

    try:
        return read_tls_material(cert_dir), cert_dir
    except OSError as e:
        if explicit:
            raise CertificateLoadError(ERROR_CERTIFICATE_LOAD.format(cert_dir, e)) from e
        warnings.append(WARNING_CERTIFICATE_LOAD.format(cert_dir, e))
        return None, cert_dir
