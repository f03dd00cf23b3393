"""Terminal rendering of diagnostic reports for the ``diagnose`` command."""

import typer

from docker_mcp.diagnostics.report import DiagnosticReport, StageOutcome, StageResult
from docker_mcp.diagnostics.runner import (
    STAGE_CERTIFICATES,
    STAGE_CONFIGURATION,
    STAGE_CONNECTIVITY,
    STAGE_OPERATIONS,
)
from docker_mcp.utils.errors import ResolutionError, ResolutionErrorKind

SECTION_WIDTH = 60

STAGE_TITLES = {
    STAGE_CONFIGURATION: "Docker Configuration",
    STAGE_CERTIFICATES: "TLS Certificate Validation",
    STAGE_CONNECTIVITY: "Connection Test",
    STAGE_OPERATIONS: "Docker Operations Test",
}

OUTCOME_STYLES = {
    StageOutcome.PASS: ("✓", typer.colors.GREEN),
    StageOutcome.WARN: ("⚠", typer.colors.YELLOW),
    StageOutcome.FAIL: ("✗", typer.colors.RED),
}

TLS_RECOMMENDATIONS = (
    "Verify DOCKER_HOST uses https://: https://hostname:2376",
    "Set DOCKER_TLS_VERIFY=1",
    "Set DOCKER_CERT_PATH to directory with ca.pem, cert.pem, key.pem",
    "Ensure certificates are valid and match the server",
)

CONNECTION_RECOMMENDATIONS = (
    (
        "Local Docker",
        (
            "Ensure Docker Desktop/daemon is running",
            "Check Docker socket permissions (Linux: add user to docker group)",
        ),
    ),
    (
        "Remote Docker (TCP)",
        (
            "Verify DOCKER_HOST is correct: tcp://hostname:2375",
            "Ensure Docker daemon is configured to listen on TCP",
            "Check firewall rules allow connection to port 2375/2376",
        ),
    ),
    ("Remote Docker (TLS)", TLS_RECOMMENDATIONS),
    (
        "SSH Tunnel",
        (
            "Establish SSH tunnel first: ssh -NL localhost:2375:/var/run/docker.sock user@host",
            "Then set: DOCKER_HOST=tcp://localhost:2375",
        ),
    ),
)

OPERATIONS_RECOMMENDATIONS = (
    "Connection established but operations failed",
    "Check Docker daemon logs for errors",
    "Verify user has permission to perform Docker operations",
)

RESOLUTION_HINTS = {
    ResolutionErrorKind.MISSING_CERT_PATH: "Set DOCKER_CERT_PATH or unset DOCKER_TLS_VERIFY",
    ResolutionErrorKind.CERTIFICATE_LOAD_FAILED: (
        "Check that ca.pem, cert.pem and key.pem exist in DOCKER_CERT_PATH and are readable"
    ),
    ResolutionErrorKind.HOME_DIRECTORY_UNRESOLVABLE: (
        "Use an absolute DOCKER_CERT_PATH or set HOME/USERPROFILE"
    ),
    ResolutionErrorKind.INVALID_ENDPOINT: (
        "Use DOCKER_HOST=unix:///path, npipe://..., tcp://host:port or https://host:port"
    ),
}


def _section(title: str, err: bool = False) -> None:
    typer.secho(f"\n{'=' * SECTION_WIDTH}", bold=True, err=err)
    typer.secho(f"  {title}", bold=True, err=err)
    typer.secho("=" * SECTION_WIDTH, bold=True, err=err)


def render_stage(stage: StageResult) -> None:
    """Print one stage with its outcome marker and messages."""
    _section(STAGE_TITLES.get(stage.name, stage.name))
    marker, color = OUTCOME_STYLES[stage.outcome]
    for message in stage.messages:
        typer.secho(f"  {message}", fg=typer.colors.CYAN)
    typer.secho(f"{marker} {stage.name}: {stage.outcome.value}", fg=color)


def render_recommendations(report: DiagnosticReport) -> None:
    """Print guidance based on which stages failed."""
    _section("Recommendations")
    if report.outcome is StageOutcome.PASS:
        typer.secho(
            "✓ All tests passed! Your Docker connection is working correctly.",
            fg=typer.colors.GREEN,
        )
        return
    if report.usable:
        typer.secho(
            "⚠ Connection is usable but degraded; see warnings above.",
            fg=typer.colors.YELLOW,
        )
        return

    connectivity = report.stage(STAGE_CONNECTIVITY)
    if connectivity is not None and not connectivity.passed:
        typer.secho("\nConnection Issues - Possible Solutions:", fg=typer.colors.YELLOW)
        for index, (title, tips) in enumerate(CONNECTION_RECOMMENDATIONS, start=1):
            typer.secho(f"\n{index}. {title}:", bold=True)
            for tip in tips:
                typer.secho(f"   - {tip}", fg=typer.colors.CYAN)
        return

    operations = report.stage(STAGE_OPERATIONS)
    if operations is not None and not operations.passed:
        typer.secho("\nDocker Operations Failed:", fg=typer.colors.YELLOW)
        guidance = OPERATIONS_RECOMMENDATIONS
    else:
        typer.secho("\nCertificate Issues:", fg=typer.colors.YELLOW)
        guidance = TLS_RECOMMENDATIONS
    for tip in guidance:
        typer.secho(f"  - {tip}", fg=typer.colors.CYAN)


def render_report(report: DiagnosticReport) -> None:
    """Print a full report followed by recommendations."""
    for stage in report.stages:
        render_stage(stage)
    render_recommendations(report)


def render_resolution_error(error: ResolutionError) -> None:
    """Print a resolution failure with actionable guidance to stderr."""
    _section("Docker Client Initialization", err=True)
    typer.secho(f"✗ Failed to resolve Docker endpoint: {error}", fg=typer.colors.RED, err=True)
    typer.secho(f"  Hint: {RESOLUTION_HINTS[error.kind]}", fg=typer.colors.CYAN, err=True)
