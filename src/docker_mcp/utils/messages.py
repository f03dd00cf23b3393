"""Centralized message templates.

All messages use template strings with format() placeholders.
"""

# Resource not found error messages (used by tool modules for NotFound exceptions)
ERROR_CONTAINER_NOT_FOUND = "Container not found: {}"
ERROR_IMAGE_NOT_FOUND = "Image not found: {}"

# Endpoint resolution
ERROR_MISSING_CERT_PATH = (
    "DOCKER_TLS_VERIFY is set but DOCKER_CERT_PATH is not configured. "
    "Set DOCKER_CERT_PATH to the directory containing ca.pem, cert.pem, and key.pem."
)
ERROR_HOME_UNRESOLVABLE = (
    'Certificate path starts with "~" but HOME/USERPROFILE is not set. '
    "Please use an absolute path or set the HOME/USERPROFILE environment variable."
)
ERROR_CERTIFICATE_LOAD = (
    "Failed to load TLS certificates from {}. "
    "Ensure ca.pem, cert.pem, and key.pem exist and are readable. Error: {}"
)
ERROR_INVALID_PORT = "Invalid Docker port {!r}: must be an integer between 1 and 65535"
ERROR_EMPTY_HOST = "Docker host {!r} does not name a host"
WARNING_HOME_UNRESOLVABLE = (
    'Certificate path starts with "~" but HOME/USERPROFILE is not set; '
    "skipping certificate loading"
)
WARNING_CERTIFICATE_LOAD = "Could not load certificates from {}: {}"
