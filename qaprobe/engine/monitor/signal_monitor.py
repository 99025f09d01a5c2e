"""
Signal Monitor - Passive, time-boxed capture for monitorSignals.

Sequence:
1. Open a session with only the collectors enabled by FilterFlags
2. Run the optional interactions as the flow "Monitored Interactions"
3. Wait out the rest of the wall-clock duration
4. Sample performance figures (only when filters.performance)
5. Sweep the page for missing alt text and missing labels
6. Classify everything captured and aggregate
"""

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from qaprobe.core.config import settings
from qaprobe.monitoring import probe_logger

from ..aggregator import ResultAggregator
from ..classifier import IssueClassifier
from ..contracts.errors import ProbeError, SessionError
from ..contracts.flows import Flow, FlowStep
from ..contracts.results import QASummary, TestResult
from ..contracts.signals import FilterFlags, Signal, SignalKind, Viewport
from ..evidence import ScreenshotExporter
from ..interaction import InteractionRunner
from ..orchestrator.connectivity import connectivity_failure, connectivity_result
from ..probes import JSEvaluators, PerformanceProbe, sample_metrics
from ..session import SessionManager

logger = logging.getLogger("qaprobe.engine.monitor")

MONITORED_FLOW = "Monitored Interactions"
SWEEP_TEST = "Accessibility Sweep"


@dataclass
class MonitorReport:
    """Everything one monitorSignals invocation captured."""

    url: str
    duration_ms: int
    summary: QASummary
    signals: List[Signal] = field(default_factory=list)

    console_messages: List[Dict[str, Any]] = field(default_factory=list)
    """Console error/warning transcript (kept per FilterFlags)."""

    performance_metrics: List[Dict[str, Any]] = field(default_factory=list)
    initial_load_ms: Optional[float] = None

    interactions: Optional[Dict[str, int]] = None
    """{"performed": n, "failed": m} when interactions were supplied."""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary for the reporting sink."""
        data = {
            "url": self.url,
            "duration_ms": self.duration_ms,
            "initial_load_ms": self.initial_load_ms,
            "summary": self.summary.to_dict(),
            "signals": [s.to_dict() for s in self.signals],
            "console_messages": list(self.console_messages),
            "performance_metrics": list(self.performance_metrics),
        }
        if self.interactions is not None:
            data["interactions"] = dict(self.interactions)
        return data


class SignalMonitor:
    """
    Coordinates one monitorSignals invocation.

    Usage:
        monitor = SignalMonitor()
        report = await monitor.monitor(
            "http://localhost:3000",
            duration_ms=10000,
            filters=FilterFlags(performance=True),
        )
        for signal in report.signals:
            print(signal.kind, signal.message)
    """

    def __init__(
        self,
        session_manager: Optional[SessionManager] = None,
        classifier: Optional[IssueClassifier] = None,
        aggregator: Optional[ResultAggregator] = None,
        runner: Optional[InteractionRunner] = None,
        performance_probe: Optional[PerformanceProbe] = None,
        timeout_ms: Optional[int] = None,
    ):
        self._session_manager = session_manager
        self._classifier = classifier or IssueClassifier()
        self._aggregator = aggregator or ResultAggregator()
        self._runner = runner
        self._performance = performance_probe or PerformanceProbe()
        self._timeout_ms = settings.MONITOR_TIMEOUT_MS if timeout_ms is None else timeout_ms

    def _get_session_manager(self) -> SessionManager:
        if self._session_manager is None:
            self._session_manager = SessionManager()
        return self._session_manager

    def _get_runner(self) -> InteractionRunner:
        if self._runner is None:
            self._runner = InteractionRunner(evidence=ScreenshotExporter())
        return self._runner

    async def monitor(
        self,
        url: str,
        duration_ms: int = 30000,
        filters: Optional[FilterFlags] = None,
        interactions: Iterable[FlowStep] = (),
        viewport: Optional[Viewport] = None,
    ) -> MonitorReport:
        """
        Capture Signals from `url` for `duration_ms` of wall-clock time.

        Raises:
            ProbeError: a fault after the session opened, carrying the
                results and Signals captured so far
        """
        filters = filters or FilterFlags()
        steps = list(interactions)
        run_id = uuid.uuid4().hex[:8]
        start = time.monotonic()
        probe_logger.log_run_start(
            run_id, url, "monitor", {"duration_ms": duration_ms, "interactions": len(steps)}
        )

        manager = self._get_session_manager()
        try:
            session = await manager.open(url, viewport or Viewport(), filters, self._timeout_ms)
        except SessionError as e:
            probe_logger.log_session_error(run_id, url, e.message, e.status)
            result, issue, signal = connectivity_failure(e, self._classifier)
            summary = self._aggregator.aggregate([result], [issue])
            probe_logger.log_run_complete(run_id, summary.to_dict(), _elapsed_ms(start))
            return MonitorReport(
                url=url,
                duration_ms=duration_ms,
                summary=summary,
                signals=list(e.partial_signals) + [signal],
            )

        results: List[TestResult] = []
        metrics: List[Dict[str, Any]] = []
        interaction_counts = None
        try:
            results.append(connectivity_result(session))

            if steps:
                flow_result = await self._get_runner().run_flow(session, Flow(MONITORED_FLOW, steps))
                results.append(flow_result)
                interaction_counts = {
                    "performed": len(steps),
                    "failed": len(flow_result.failed_steps),
                }

            remaining = duration_ms - _elapsed_ms(start)
            if remaining > 0:
                await session.page.wait_for_timeout(remaining)

            if filters.performance:
                metrics.append(await self._sample_performance(session))

            results.append(await self._sweep(session))

            signals = session.signals.snapshot()
            console = list(session.console_messages)
            summary = self._aggregator.aggregate(results, self._classifier.classify_all(signals))
        except Exception as e:
            logger.exception(f"Monitor run {run_id} failed: {e}")
            raise ProbeError(
                str(e),
                partial_results=results,
                partial_signals=session.signals.snapshot(),
            ) from e
        finally:
            await manager.close(session)

        probe_logger.log_run_complete(run_id, summary.to_dict(), _elapsed_ms(start))
        return MonitorReport(
            url=url,
            duration_ms=duration_ms,
            summary=summary,
            signals=list(signals),
            console_messages=console,
            performance_metrics=metrics,
            initial_load_ms=round(session.initial_load_ms, 2),
            interactions=interaction_counts,
        )

    async def _sample_performance(self, session) -> Dict[str, Any]:
        with session.signals.phase("performance"):
            sample = await sample_metrics(session.page)
            self._performance.judge(session, sample)
        return sample

    async def _sweep(self, session) -> TestResult:
        """Missing alt text and missing labels on whatever page is current."""
        with session.signals.phase("sweep"):
            try:
                missing_alt = await session.page.evaluate(JSEvaluators.MISSING_ALT)
                unlabeled = await session.page.evaluate(JSEvaluators.MISSING_LABELS)
            except Exception as e:
                logger.warning(f"Accessibility sweep failed: {e}")
                return TestResult(name=SWEEP_TEST, passed=False, error=str(e))

            for image in missing_alt:
                session.signals.emit(
                    SignalKind.ACCESSIBILITY_VIOLATION,
                    f"Image {image['element']} is missing alt text",
                    locator=image["element"],
                    detail={"rule": "missing-alt", "interactive": False, "src": image.get("src")},
                )
            for control in unlabeled:
                session.signals.emit(
                    SignalKind.ACCESSIBILITY_VIOLATION,
                    f"Form control {control['element']} is missing a label",
                    locator=control["element"],
                    detail={"rule": "missing-label", "interactive": True, "type": control.get("type")},
                )

        return TestResult(
            name=SWEEP_TEST,
            passed=not missing_alt and not unlabeled,
            details={"missing_alt_count": len(missing_alt), "unlabeled_count": len(unlabeled)},
        )


def _elapsed_ms(start: float) -> float:
    return (time.monotonic() - start) * 1000
