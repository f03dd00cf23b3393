"""Docker daemon endpoint resolution."""

from docker_mcp.endpoint.descriptor import (
    EndpointDescriptor,
    EndpointIndicators,
    TLSMaterial,
    TransportKind,
)
from docker_mcp.endpoint.resolver import default_endpoint, is_tls_verify_enabled, resolve

__all__ = [
    "EndpointDescriptor",
    "EndpointIndicators",
    "TLSMaterial",
    "TransportKind",
    "default_endpoint",
    "is_tls_verify_enabled",
    "resolve",
]
