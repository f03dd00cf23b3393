"""Staged connection diagnostics for a resolved Docker endpoint."""

from docker_mcp.diagnostics.causes import FailureCause, classify_failure
from docker_mcp.diagnostics.report import DiagnosticReport, StageOutcome, StageResult
from docker_mcp.diagnostics.runner import ConnectionDiagnostics

__all__ = [
    "ConnectionDiagnostics",
    "DiagnosticReport",
    "FailureCause",
    "StageOutcome",
    "StageResult",
    "classify_failure",
]
