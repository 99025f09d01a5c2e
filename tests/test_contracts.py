"""
Tests for engine contracts.

Tests the data structures shared by every component:
- Signal immutability and phase attribution
- Enum parsing
- Flow parsing
- Result and summary serialization
"""

from dataclasses import FrozenInstanceError

import pytest

from qaprobe.engine.contracts import (
    Flow,
    FlowStep,
    IssueRecord,
    QASummary,
    Severity,
    Signal,
    SignalKind,
    StepAction,
    StepOutcome,
    TestResult,
    Viewport,
)


class TestSignal:
    """Tests for Signal dataclass."""

    def test_signal_is_frozen(self):
        signal = Signal(SignalKind.SCRIPT_ERROR, "boom")
        with pytest.raises(FrozenInstanceError):
            signal.message = "changed"

    def test_detail_is_read_only(self):
        """Detail cannot be mutated downstream, even through the caller's dict."""
        detail = {"status": 404}
        signal = Signal(SignalKind.HTTP_ERROR_STATUS, "HTTP 404", detail=detail)

        detail["status"] = 500
        assert signal.detail["status"] == 404
        with pytest.raises(TypeError):
            signal.detail["status"] = 500

    def test_probe_defaults_to_session(self):
        signal = Signal(SignalKind.SCRIPT_ERROR, "boom")
        assert signal.probe == "session"
        assert signal.rule is None

    def test_to_dict(self):
        signal = Signal(
            SignalKind.LAYOUT_VIOLATION,
            "overflow",
            locator="html",
            detail={"rule": "horizontal-overflow", "probe": "responsive"},
        )
        data = signal.to_dict()

        assert data["kind"] == "layout-violation"
        assert data["locator"] == "html"
        assert data["detail"]["rule"] == "horizontal-overflow"
        assert "timestamp" in data

    def test_timestamp_is_utc(self):
        signal = Signal(SignalKind.SCRIPT_ERROR, "boom")
        assert signal.timestamp.tzinfo is not None


class TestSignalKind:
    """Tests for SignalKind enum."""

    def test_values_are_wire_names(self):
        assert SignalKind("script-error") is SignalKind.SCRIPT_ERROR
        assert SignalKind.NETWORK_FAILURE.value == "network-failure"


class TestFlowParsing:
    """Tests for Flow and FlowStep parsing."""

    def test_navigate_alias(self):
        assert StepAction.from_string("navigate") is StepAction.NAVIGATE
        assert StepAction.from_string("goto") is StepAction.NAVIGATE

    def test_unknown_action(self):
        with pytest.raises(ValueError):
            StepAction.from_string("teleport")

    def test_needs_selector(self):
        assert StepAction.CLICK.needs_selector
        assert StepAction.VERIFY.needs_selector
        assert not StepAction.WAIT.needs_selector

    def test_flow_from_dict(self):
        flow = Flow.from_dict({
            "name": "login",
            "steps": [
                {"action": "goto", "value": "/login"},
                {"action": "click", "selector": "#go", "timeout": 1000},
                {"action": "verify", "selector": "h1", "expected": "Hi"},
            ],
        })

        assert flow.name == "login"
        assert len(flow.steps) == 3
        assert flow.steps[0].action is StepAction.NAVIGATE
        assert flow.steps[1].timeout_ms == 1000
        assert flow.steps[2].timeout_ms is None
        assert flow.steps[2].expected == "Hi"

    def test_step_defaults(self):
        step = FlowStep(StepAction.WAIT)
        assert step.timeout_ms is None
        assert step.selector is None


class TestResults:
    """Tests for TestResult, StepOutcome and QASummary."""

    def test_failed_steps_exclude_skipped(self):
        result = TestResult(
            name="User Flow: x",
            passed=False,
            steps=[
                StepOutcome(1, "goto", passed=False, error="dns"),
                StepOutcome(2, "click", skipped=True),
            ],
        )
        assert [s.step_index for s in result.failed_steps] == [1]

    def test_verify_outcome_serializes_values(self):
        outcome = StepOutcome(3, "verify", passed=False, selector="h1", expected_value="Hi")
        data = outcome.to_dict()

        assert data["actual_value"] is None
        assert data["expected_value"] == "Hi"

    def test_empty_summary(self):
        summary = QASummary()

        assert summary.total_issues == 0
        assert summary.severity_counts == {"critical": 0, "major": 0, "minor": 0}

    def test_summary_to_dict(self):
        issue = IssueRecord(Severity.MAJOR, "Forms", "1 form(s) missing submit button", "Add one")
        summary = QASummary(
            total_tests=2,
            passed=1,
            failed=1,
            issues=[issue],
            severity_counts={"critical": 0, "major": 1, "minor": 0},
            category_counts={"Forms": 1},
            results=[TestResult("A", True), TestResult("B", False, error="x")],
        )
        data = summary.to_dict()

        assert data["total_issues"] == 1
        assert data["issues"][0]["severity"] == "major"
        assert data["results"][1]["error"] == "x"
        assert "1/2 checks passed" in summary.describe()

    def test_issue_count_defaults_to_one(self):
        issue = IssueRecord(Severity.MINOR, "SEO", "No title", "Add one")
        assert issue.count == 1


class TestViewport:
    def test_to_dict(self):
        assert Viewport(375, 667).to_dict() == {"width": 375, "height": 667}
        assert Viewport().describe() == "1280x720"
