"""Classify daemon connection failures into a small set of causes."""

import errno
import socket
import ssl
from collections.abc import Iterator
from enum import Enum


class FailureCause(str, Enum):
    """Why a connection to the daemon failed."""

    CONNECTION_REFUSED = "connection-refused"
    HOST_UNRESOLVABLE = "host-unresolvable"
    TIMED_OUT = "timed-out"
    CERTIFICATE_ERROR = "certificate-error"
    UNKNOWN = "unknown"


CAUSE_HINTS = {
    FailureCause.CONNECTION_REFUSED: "Connection refused - is Docker daemon running?",
    FailureCause.HOST_UNRESOLVABLE: "Host not found - check DOCKER_HOST address",
    FailureCause.TIMED_OUT: "Connection timed out - check network and firewall settings",
    FailureCause.CERTIFICATE_ERROR: "Certificate error - verify TLS certificate configuration",
    FailureCause.UNKNOWN: "Unrecognized error - see the message above",
}

# Checked in order against the lowercased messages of the whole exception chain
_MESSAGE_PATTERNS: tuple[tuple[FailureCause, tuple[str, ...]], ...] = (
    (
        FailureCause.CERTIFICATE_ERROR,
        ("certificate", "x509", "ssl:", "sslerror", "ssl error", "tls handshake", "tlsv1"),
    ),
    (FailureCause.CONNECTION_REFUSED, ("connection refused", "econnrefused")),
    (
        FailureCause.HOST_UNRESOLVABLE,
        (
            "name or service not known",
            "nodename nor servname",
            "temporary failure in name resolution",
            "getaddrinfo",
            "enotfound",
            "no address associated",
        ),
    ),
    (FailureCause.TIMED_OUT, ("timed out", "timeout", "etimedout")),
)


def iter_exception_chain(error: BaseException) -> Iterator[BaseException]:
    """Yield ``error`` and every exception reachable from it.

    Follows ``__cause__``, ``__context__``, urllib3-style ``reason`` attributes
    and exceptions passed as constructor arguments, which is how requests and
    urllib3 wrap socket errors.
    """
    seen: set[int] = set()
    pending = [error]
    while pending:
        current = pending.pop(0)
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        linked = [current.__cause__, current.__context__, getattr(current, "reason", None)]
        linked.extend(arg for arg in current.args if isinstance(arg, BaseException))
        pending.extend(exc for exc in linked if isinstance(exc, BaseException))


def _classify_exception(error: BaseException) -> FailureCause | None:
    if isinstance(error, ssl.SSLError):
        return FailureCause.CERTIFICATE_ERROR
    if isinstance(error, ConnectionRefusedError):
        return FailureCause.CONNECTION_REFUSED
    if isinstance(error, socket.gaierror):
        return FailureCause.HOST_UNRESOLVABLE
    if isinstance(error, TimeoutError):
        return FailureCause.TIMED_OUT

    code = getattr(error, "errno", None)
    if code == errno.ECONNREFUSED:
        return FailureCause.CONNECTION_REFUSED
    if code == errno.ETIMEDOUT:
        return FailureCause.TIMED_OUT
    return None


def classify_failure(error: BaseException) -> FailureCause:
    """Classify a connection error by exception kind, error code, then message text."""
    chain = list(iter_exception_chain(error))
    for exc in chain:
        cause = _classify_exception(exc)
        if cause is not None:
            return cause

    text = " ".join(str(exc) for exc in chain).lower()
    for cause, patterns in _MESSAGE_PATTERNS:
        if any(pattern in text for pattern in patterns):
            return cause
    return FailureCause.UNKNOWN
