"""
Tests for SignalMonitor (monitorSignals).
"""

import pytest

from qaprobe.engine.contracts import FilterFlags, FlowStep, Severity, SignalKind, StepAction
from qaprobe.engine.monitor import MONITORED_FLOW, SignalMonitor
from qaprobe.engine.probes import JSEvaluators
from qaprobe.engine.session import SessionManager
from tests.fakes import (
    HOME,
    FakeLauncher,
    FakeRoute,
    console,
    failed_request,
    page_error,
    subresource_response,
)


def make_monitor(routes):
    launcher = FakeLauncher(routes)
    return SignalMonitor(session_manager=SessionManager(launcher=launcher)), launcher


@pytest.fixture
def noisy_site():
    return {
        HOME: FakeRoute(
            elements={"#more": "Load more"},
            evaluations={
                JSEvaluators.MISSING_ALT: [{"element": "img[0]", "src": "/hero.png"}],
                JSEvaluators.PERFORMANCE_METRICS: {"loadTime": 3500.0, "heapUsed": 1024},
            },
            events=[
                page_error("Cannot read properties of undefined"),
                console("warning", "componentWillMount is deprecated"),
                console("error", "Mixed Content: requested an insecure resource"),
                subresource_response("http://app.test/api/items", 404),
                failed_request("http://cdn.test/font.woff"),
            ],
        ),
    }


class TestMonitor:
    """Tests for SignalMonitor.monitor()."""

    @pytest.mark.asyncio
    async def test_captures_everything_by_default(self, noisy_site):
        monitor, launcher = make_monitor(noisy_site)

        report = await monitor.monitor(HOME, duration_ms=1000)

        kinds = {s.kind for s in report.signals}
        assert {
            SignalKind.SCRIPT_ERROR,
            SignalKind.SECURITY_WARNING,
            SignalKind.HTTP_ERROR_STATUS,
            SignalKind.NETWORK_FAILURE,
            SignalKind.ACCESSIBILITY_VIOLATION,
        } <= kinds
        assert [m["type"] for m in report.console_messages] == ["warning", "error"]
        assert report.performance_metrics == []
        assert report.summary.passed + report.summary.failed == report.summary.total_tests
        assert launcher.page.close_count == 1

    @pytest.mark.asyncio
    async def test_filters_apply_at_capture_time(self, noisy_site):
        monitor, _ = make_monitor(noisy_site)
        filters = FilterFlags(errors=False, warnings=False, network=False, security=False)

        report = await monitor.monitor(HOME, duration_ms=0, filters=filters)

        assert {s.kind for s in report.signals} == {SignalKind.ACCESSIBILITY_VIOLATION}
        assert report.console_messages == []

    @pytest.mark.asyncio
    async def test_waits_out_duration(self, noisy_site):
        monitor, launcher = make_monitor(noisy_site)
        await monitor.monitor(HOME, duration_ms=60000)

        [waited] = launcher.page.waits
        assert 0 < waited <= 60000

    @pytest.mark.asyncio
    async def test_performance_sampling(self, noisy_site):
        monitor, _ = make_monitor(noisy_site)

        report = await monitor.monitor(HOME, duration_ms=0, filters=FilterFlags(performance=True))

        assert report.performance_metrics[0]["loadTime"] == 3500.0
        performance = [i for i in report.summary.issues if i.category == "Performance"]
        assert [i.severity for i in performance] == [Severity.MAJOR]

    @pytest.mark.asyncio
    async def test_interactions_run_as_one_flow(self, noisy_site):
        monitor, launcher = make_monitor(noisy_site)

        report = await monitor.monitor(HOME, duration_ms=0, interactions=[
            FlowStep(StepAction.CLICK, selector="#more"),
            FlowStep(StepAction.CLICK, selector="#missing", timeout_ms=10),
        ])

        names = [r.name for r in report.summary.results]
        assert f"User Flow: {MONITORED_FLOW}" in names
        assert report.interactions == {"performed": 2, "failed": 1}
        assert launcher.page.clicks == ["#more"]

    @pytest.mark.asyncio
    async def test_connectivity_failure(self):
        monitor, launcher = make_monitor({HOME: FakeRoute(error="net::ERR_NAME_NOT_RESOLVED")})

        report = await monitor.monitor(HOME, duration_ms=5000)

        [issue] = report.summary.issues
        assert issue.category == "Connectivity"
        assert issue.severity is Severity.CRITICAL
        assert report.signals[-1].probe == "connectivity"
        assert launcher.page.waits == []
        assert launcher.page.close_count == 1

    @pytest.mark.asyncio
    async def test_report_to_dict(self, noisy_site):
        monitor, _ = make_monitor(noisy_site)
        report = await monitor.monitor(HOME, duration_ms=0)
        data = report.to_dict()

        assert data["url"] == HOME
        assert data["summary"]["total_tests"] == 2
        assert "interactions" not in data
        assert all("kind" in s for s in data["signals"])
