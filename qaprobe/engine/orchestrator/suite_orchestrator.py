"""
Suite Orchestrator - Top-level runner for runSuite.

Runs connectivity first, then the probes of the requested SuiteMode in
plan order, then any custom flows, all against one session. Per-probe
faults are contained inside each probe; only a failure outside every
probe surfaces as ProbeError.
"""

import logging
import time
import uuid
from typing import Dict, Iterable, List, Optional

from qaprobe.monitoring import probe_logger

from ..aggregator import ResultAggregator
from ..classifier import IssueClassifier
from ..contracts.errors import ProbeError, SessionError
from ..contracts.flows import Flow
from ..contracts.results import QASummary, TestResult
from ..contracts.signals import FilterFlags, Viewport
from ..evidence import ScreenshotExporter
from ..interaction import InteractionRunner
from ..probes import (
    BasicProbe,
    FormsProbe,
    NavigationProbe,
    PerformanceProbe,
    Probe,
    ResponsiveProbe,
    UIQualityProbe,
)
from ..session import SessionManager
from .connectivity import connectivity_failure, connectivity_result
from .contracts import SuiteMode

logger = logging.getLogger("qaprobe.engine.orchestrator")

def auth_placeholder() -> TestResult:
    return TestResult(
        name="Authentication Tests",
        passed=True,
        details={"note": "Authentication tests are not implemented; this mode always passes"},
    )


def default_probes() -> Dict[str, Probe]:
    """One instance of every DOM probe, keyed by plan name."""
    probes: List[Probe] = [
        BasicProbe(),
        NavigationProbe(),
        FormsProbe(),
        ResponsiveProbe(),
        UIQualityProbe(),
        PerformanceProbe(),
    ]
    return {probe.name: probe for probe in probes}


class SuiteOrchestrator:
    """
    Coordinates one runSuite invocation.

    Usage:
        orchestrator = SuiteOrchestrator()
        summary = await orchestrator.run_suite(
            "http://localhost:3000",
            SuiteMode.COMPREHENSIVE,
            flows=[Flow.from_dict(raw_flow)],
        )
        print(summary.describe())
    """

    def __init__(
        self,
        session_manager: Optional[SessionManager] = None,
        classifier: Optional[IssueClassifier] = None,
        aggregator: Optional[ResultAggregator] = None,
        runner: Optional[InteractionRunner] = None,
        probes: Optional[Dict[str, Probe]] = None,
        timeout_ms: Optional[int] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            session_manager: SessionManager instance
            classifier: IssueClassifier instance
            aggregator: ResultAggregator instance
            runner: InteractionRunner for custom flows
            probes: Probe instances keyed by plan name
            timeout_ms: Initial navigation timeout
        """
        # Components are created lazily so tests can inject fakes
        self._session_manager = session_manager
        self._classifier = classifier or IssueClassifier()
        self._aggregator = aggregator or ResultAggregator()
        self._runner = runner
        self._probes = probes
        self._timeout_ms = timeout_ms

    def _get_session_manager(self) -> SessionManager:
        if self._session_manager is None:
            self._session_manager = SessionManager()
        return self._session_manager

    def _get_runner(self) -> InteractionRunner:
        if self._runner is None:
            self._runner = InteractionRunner(evidence=ScreenshotExporter())
        return self._runner

    def _get_probes(self) -> Dict[str, Probe]:
        if self._probes is None:
            self._probes = default_probes()
        return self._probes

    async def run_suite(
        self,
        url: str,
        mode: SuiteMode = SuiteMode.COMPREHENSIVE,
        flows: Iterable[Flow] = (),
        viewport: Optional[Viewport] = None,
    ) -> QASummary:
        """
        Execute one suite against `url`.

        Returns:
            QASummary. When the session cannot open, the summary holds only
            the failed Connectivity Test and one critical Connectivity issue.

        Raises:
            ProbeError: a fault outside any individual probe, carrying the
                results and Signals captured so far
        """
        run_id = uuid.uuid4().hex[:8]
        flows = list(flows)
        start = time.monotonic()
        probe_logger.log_run_start(run_id, url, mode.value, {"flows": len(flows)})

        manager = self._get_session_manager()
        try:
            session = await manager.open(url, viewport or Viewport(), FilterFlags(), self._timeout_ms)
        except SessionError as e:
            probe_logger.log_session_error(run_id, url, e.message, e.status)
            result, issue, _ = connectivity_failure(e, self._classifier)
            summary = self._aggregator.aggregate([result], [issue])
            probe_logger.log_run_complete(run_id, summary.to_dict(), _elapsed_ms(start))
            return summary

        results: List[TestResult] = []
        try:
            results.append(connectivity_result(session))
            results.extend(await self._run_plan(run_id, session, mode))
            for flow in flows:
                results.append(await self._run_flow(run_id, session, flow))

            signals = session.signals.snapshot()
            summary = self._aggregator.aggregate(results, self._classifier.classify_all(signals))
        except Exception as e:
            logger.exception(f"Suite run {run_id} failed: {e}")
            raise ProbeError(
                str(e),
                partial_results=results,
                partial_signals=session.signals.snapshot(),
            ) from e
        finally:
            await manager.close(session)

        probe_logger.log_run_complete(run_id, summary.to_dict(), _elapsed_ms(start))
        return summary

    async def _run_plan(self, run_id: str, session, mode: SuiteMode) -> List[TestResult]:
        if mode is SuiteMode.AUTH:
            probe_logger.log_probe(run_id, "auth", True)
            return [auth_placeholder()]

        probes = self._get_probes()
        results: List[TestResult] = []
        for name in mode.plan:
            probe_start = time.monotonic()
            probe_results = await probes[name].execute(session)
            failed = [r for r in probe_results if not r.passed]
            probe_logger.log_probe(
                run_id,
                name,
                passed=not failed,
                duration_ms=_elapsed_ms(probe_start),
                error=failed[0].error if failed else None,
            )
            results.extend(probe_results)
        return results

    async def _run_flow(self, run_id: str, session, flow: Flow) -> TestResult:
        flow_start = time.monotonic()
        result = await self._get_runner().run_flow(session, flow)
        probe_logger.log_probe(
            run_id,
            f"flow:{flow.name}",
            passed=result.passed,
            duration_ms=_elapsed_ms(flow_start),
            error=result.error,
        )
        return result


def _elapsed_ms(start: float) -> float:
    return (time.monotonic() - start) * 1000
