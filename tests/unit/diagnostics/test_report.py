"""Unit tests for diagnostic report types."""

import pytest

from docker_mcp.diagnostics.report import DiagnosticReport, StageOutcome, StageResult


def _stage(name: str, outcome: StageOutcome) -> StageResult:
    return StageResult(name=name, outcome=outcome)


class TestStageResult:
    """Tests for StageResult."""

    def test_passed(self) -> None:
        assert _stage("configuration", StageOutcome.PASS).passed
        assert not _stage("certificates", StageOutcome.WARN).passed
        assert not _stage("connectivity", StageOutcome.FAIL).passed

    def test_to_dict(self) -> None:
        stage = StageResult(
            name="connectivity",
            outcome=StageOutcome.FAIL,
            messages=("Failed to connect: boom",),
            details={"cause": "unknown"},
        )
        assert stage.to_dict() == {
            "name": "connectivity",
            "outcome": "fail",
            "messages": ["Failed to connect: boom"],
            "details": {"cause": "unknown"},
        }


class TestDiagnosticReport:
    """Tests for DiagnosticReport aggregation."""

    def test_empty_report_passes(self) -> None:
        report = DiagnosticReport(stages=())
        assert report.outcome is StageOutcome.PASS
        assert report.usable

    @pytest.mark.parametrize(
        "outcomes,expected",
        [
            ((StageOutcome.PASS, StageOutcome.PASS), StageOutcome.PASS),
            ((StageOutcome.PASS, StageOutcome.WARN, StageOutcome.PASS), StageOutcome.WARN),
            ((StageOutcome.WARN, StageOutcome.FAIL), StageOutcome.FAIL),
            ((StageOutcome.FAIL, StageOutcome.PASS), StageOutcome.FAIL),
        ],
    )
    def test_outcome_is_worst_stage(
        self, outcomes: tuple[StageOutcome, ...], expected: StageOutcome
    ) -> None:
        report = DiagnosticReport(
            stages=tuple(_stage(f"stage{i}", outcome) for i, outcome in enumerate(outcomes))
        )
        assert report.outcome is expected

    def test_warn_only_report_is_usable(self) -> None:
        report = DiagnosticReport(
            stages=(_stage("configuration", StageOutcome.PASS), _stage("certificates", StageOutcome.WARN))
        )
        assert report.usable

    def test_failed_report_is_not_usable(self) -> None:
        report = DiagnosticReport(stages=(_stage("connectivity", StageOutcome.FAIL),))
        assert not report.usable

    def test_stage_lookup(self) -> None:
        connectivity = _stage("connectivity", StageOutcome.PASS)
        report = DiagnosticReport(stages=(_stage("configuration", StageOutcome.PASS), connectivity))
        assert report.stage("connectivity") is connectivity
        assert report.stage("operations") is None

    def test_to_dict(self) -> None:
        report = DiagnosticReport(stages=(_stage("configuration", StageOutcome.WARN),))
        data = report.to_dict()
        assert data["outcome"] == "warn"
        assert data["usable"] is True
        assert [stage["name"] for stage in data["stages"]] == ["configuration"]
