"""Staged connection diagnostics against a resolved Docker endpoint.

Stages run sequentially in a fixed order: configuration, certificates (TLS
endpoints only), connectivity, and operations (only after connectivity
passed). A failing stage is recorded in the report and never raised.

Known limitation: no deadline is imposed here. How long the connectivity and
operations probes may block is governed by the docker SDK client timeout
(``DOCKER_TIMEOUT``).
"""

from collections.abc import Callable
from functools import partial
from typing import Any

from docker import DockerClient
from docker.constants import DEFAULT_DOCKER_API_VERSION

from docker_mcp.diagnostics.causes import CAUSE_HINTS, classify_failure
from docker_mcp.diagnostics.report import DiagnosticReport, StageOutcome, StageResult
from docker_mcp.docker_wrapper.client import DEFAULT_TIMEOUT, create_docker_client
from docker_mcp.endpoint.descriptor import TLS_MATERIAL_FILES, EndpointDescriptor
from docker_mcp.utils.logger import get_logger

logger = get_logger(__name__)

STAGE_CONFIGURATION = "configuration"
STAGE_CERTIFICATES = "certificates"
STAGE_CONNECTIVITY = "connectivity"
STAGE_OPERATIONS = "operations"

BYTES_PER_GB = 1024**3

ClientFactory = Callable[[EndpointDescriptor], DockerClient]


def _count_volumes(client: DockerClient) -> int:
    volumes = client.api.volumes().get("Volumes")  # type: ignore[no-untyped-call]
    return len(volumes or [])


# Read-only enumeration probes, run in this order: (label, details key, probe)
ENUMERATION_PROBES: tuple[tuple[str, str, Callable[[DockerClient], int]], ...] = (
    ("list containers", "containers", lambda c: len(c.api.containers(all=True))),
    ("list images", "images", lambda c: len(c.api.images())),
    ("list networks", "networks", lambda c: len(c.api.networks())),
    ("list volumes", "volumes", _count_volumes),
)


class ConnectionDiagnostics:
    """Run the diagnostic stages against a daemon endpoint.

    Holds no state between runs; a fresh client is created for each run
    through ``client_factory`` and closed when the run completes. The default
    factory pins the SDK's default API version, so building the client does
    not contact the daemon and the connectivity stage is the only version query.
    """

    def __init__(
        self,
        client_factory: ClientFactory | None = None,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        self._client_factory = client_factory or partial(
            create_docker_client, timeout=timeout, version=DEFAULT_DOCKER_API_VERSION
        )

    def run(self, descriptor: EndpointDescriptor) -> DiagnosticReport:
        """Run every applicable stage and return the report."""
        logger.info(f"Running connection diagnostics for {descriptor}")
        stages = [check_configuration(descriptor)]
        if descriptor.uses_tls:
            stages.append(check_certificates(descriptor))

        client: DockerClient | None = None
        try:
            try:
                client = self._client_factory(descriptor)
            except Exception as e:
                # Rejected client settings, e.g. TLS files the SDK cannot use
                logger.warning(f"Could not create Docker client: {e}")
                stages.append(_connectivity_failure(e))
            else:
                stages.append(check_connectivity(client))

            if stages[-1].passed and client is not None:
                stages.append(check_operations(client))
        finally:
            if client is not None:
                _close_client(client)

        report = DiagnosticReport(stages=tuple(stages))
        logger.info(f"Diagnostics finished with outcome: {report.outcome.value}")
        return report


def check_configuration(descriptor: EndpointDescriptor) -> StageResult:
    """Describe the resolved endpoint. Performs no I/O and always passes."""
    messages = [f"Transport: {descriptor.transport.value}"]
    details: dict[str, Any] = {"transport": descriptor.transport.value}

    if descriptor.transport.is_tcp:
        messages.append(f"Host: {descriptor.host}")
        messages.append(f"Port: {descriptor.port}")
        details.update(host=descriptor.host, port=descriptor.port)
    else:
        messages.append(f"Path: {descriptor.path}")
        details["path"] = descriptor.path

    if descriptor.uses_tls:
        loaded = descriptor.tls_material is not None
        messages.append(f"TLS material: {'loaded' if loaded else 'not loaded'}")
        if descriptor.cert_dir is not None:
            messages.append(f"Certificate directory: {descriptor.cert_dir}")
        details["tls_material_loaded"] = loaded
    messages.extend(f"Warning: {warning}" for warning in descriptor.warnings)

    return StageResult(
        name=STAGE_CONFIGURATION,
        outcome=StageOutcome.PASS,
        messages=tuple(messages),
        details=details,
    )


def check_certificates(descriptor: EndpointDescriptor) -> StageResult:
    """Check that ca.pem, cert.pem and key.pem exist and are readable."""
    cert_dir = descriptor.cert_dir
    if cert_dir is None:
        return StageResult(
            name=STAGE_CERTIFICATES,
            outcome=StageOutcome.WARN,
            messages=(
                "No certificate directory configured",
                "Server is verified against the system CA bundle; "
                "no client certificate is presented",
            ),
        )

    messages = [f"Certificate directory: {cert_dir}"]
    files: dict[str, bool] = {}
    for file_name in TLS_MATERIAL_FILES:
        file_path = cert_dir / file_name
        if not file_path.exists():
            messages.append(f"{file_name}: Not found at {file_path}")
            files[file_name] = False
            continue
        try:
            line_count = len(file_path.read_bytes().splitlines())
        except OSError as e:
            messages.append(f"{file_name}: Cannot read file - {e}")
            files[file_name] = False
        else:
            messages.append(f"{file_name}: Found ({line_count} lines)")
            files[file_name] = True

    outcome = StageOutcome.PASS if all(files.values()) else StageOutcome.FAIL
    return StageResult(
        name=STAGE_CERTIFICATES,
        outcome=outcome,
        messages=tuple(messages),
        details={"files": files},
    )


def check_connectivity(client: DockerClient) -> StageResult:
    """Query the daemon version once.

    The query is unversioned so it succeeds whatever API range the daemon
    accepts; the reported ``ApiVersion`` is the daemon's own.
    """
    try:
        version = client.version(api_version=False)  # type: ignore[no-untyped-call]
    except Exception as e:
        logger.warning(f"Connectivity check failed: {e}")
        return _connectivity_failure(e)

    details = {
        "version": version.get("Version"),
        "api_version": version.get("ApiVersion"),
        "os": version.get("Os"),
        "arch": version.get("Arch"),
        "git_commit": version.get("GitCommit"),
        "build_time": version.get("BuildTime"),
    }
    return StageResult(
        name=STAGE_CONNECTIVITY,
        outcome=StageOutcome.PASS,
        messages=(
            "Successfully connected to Docker daemon",
            f"Version: {details['version']}",
            f"API Version: {details['api_version']}",
            f"Platform: {details['os']}/{details['arch']}",
            f"Git Commit: {details['git_commit']}",
            f"Build Time: {details['build_time']}",
        ),
        details=details,
    )


def check_operations(client: DockerClient) -> StageResult:
    """Run the read-only enumeration calls and the system info call.

    Every call is attempted; the first failing one is named in the result.
    """
    messages: list[str] = []
    counts: dict[str, int] = {}
    first_failure: str | None = None

    for label, key, probe in ENUMERATION_PROBES:
        try:
            counts[key] = probe(client)
        except Exception as e:
            logger.warning(f"Operation '{label}' failed: {e}")
            messages.append(f"{label}: failed - {e}")
            first_failure = first_failure or label
        else:
            messages.append(f"{label}: found {counts[key]} {key}")

    system_info: dict[str, Any] = {}
    try:
        info = client.api.info()  # type: ignore[no-untyped-call]
    except Exception as e:
        logger.warning(f"Operation 'system info' failed: {e}")
        messages.append(f"system info: failed - {e}")
        first_failure = first_failure or "system info"
    else:
        system_info = {
            "containers": info.get("Containers"),
            "containers_running": info.get("ContainersRunning"),
            "images": info.get("Images"),
            "server_version": info.get("ServerVersion"),
            "operating_system": info.get("OperatingSystem"),
            "architecture": info.get("Architecture"),
            "cpus": info.get("NCPU"),
            "total_memory": info.get("MemTotal"),
        }
        messages.append("system info: retrieved")
        messages.append(
            f"Containers: {system_info['containers']} "
            f"({system_info['containers_running']} running)"
        )
        messages.append(f"Server Version: {system_info['server_version']}")
        messages.append(f"Operating System: {system_info['operating_system']}")
        messages.append(f"Architecture: {system_info['architecture']}")
        messages.append(f"CPUs: {system_info['cpus']}")
        if isinstance(system_info["total_memory"], int):
            messages.append(f"Total Memory: {system_info['total_memory'] / BYTES_PER_GB:.2f} GB")

    details: dict[str, Any] = {"counts": counts, "system_info": system_info}
    if first_failure is not None:
        messages.insert(0, f"First failing call: {first_failure}")
        details["first_failure"] = first_failure
        outcome = StageOutcome.FAIL
    else:
        outcome = StageOutcome.PASS

    return StageResult(
        name=STAGE_OPERATIONS,
        outcome=outcome,
        messages=tuple(messages),
        details=details,
    )


def _connectivity_failure(error: BaseException) -> StageResult:
    cause = classify_failure(error)
    return StageResult(
        name=STAGE_CONNECTIVITY,
        outcome=StageOutcome.FAIL,
        messages=(f"Failed to connect: {error}", CAUSE_HINTS[cause]),
        details={"cause": cause.value, "error": str(error)},
    )


def _close_client(client: DockerClient) -> None:
    try:
        client.close()  # type: ignore[no-untyped-call]
    except Exception as e:
        logger.warning(f"Error closing Docker client: {e}")
