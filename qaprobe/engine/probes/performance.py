"""
Performance probe: navigation timing and JS heap against fixed budgets.

- load-time: loadEventEnd - startTime over `load_budget_ms` (major)
- heap-used: performance.memory.usedJSHeapSize over `heap_budget_mb` (minor)

Heap size is only available in Chromium; elsewhere the heap check is
skipped rather than failed.
"""

import logging
from typing import Any, Dict, List, Optional

from qaprobe.core.config import settings

from ..contracts.results import TestResult
from ..contracts.signals import SignalKind
from .base import Probe
from .evaluators import JSEvaluators

logger = logging.getLogger("qaprobe.engine.probes.performance")

BYTES_PER_MB = 1024 * 1024


async def sample_metrics(page) -> Dict[str, Any]:
    """Read timing and memory figures from the live page."""
    return await page.evaluate(JSEvaluators.PERFORMANCE_METRICS)


class PerformanceProbe(Probe):
    """Emits a Signal only for figures over budget."""

    name = "performance"
    result_names = ("Performance Assessment",)

    def __init__(self, load_budget_ms: Optional[float] = None, heap_budget_mb: Optional[float] = None):
        self.load_budget_ms = settings.LOAD_TIME_BUDGET_MS if load_budget_ms is None else load_budget_ms
        self.heap_budget_mb = settings.HEAP_BUDGET_MB if heap_budget_mb is None else heap_budget_mb

    async def run(self, session) -> List[TestResult]:
        metrics = await sample_metrics(session.page)
        over_budget = self.judge(session, metrics)
        return [
            TestResult(
                name="Performance Assessment",
                passed=over_budget == 0,
                details={"metrics": metrics, "issues_found": over_budget},
            )
        ]

    def judge(self, session, metrics: Dict[str, Any]) -> int:
        """Emit Signals for every figure over budget. Returns how many were emitted."""
        emitted = 0
        load_time = metrics.get("loadTime") or 0
        if load_time > self.load_budget_ms:
            self.emit(
                session,
                SignalKind.PERFORMANCE_METRIC,
                "load-time",
                f"Slow page load time: {round(load_time)}ms",
                value=load_time,
                budget=self.load_budget_ms,
            )
            emitted += 1

        heap_used = metrics.get("heapUsed")
        if heap_used is not None and heap_used > self.heap_budget_mb * BYTES_PER_MB:
            self.emit(
                session,
                SignalKind.PERFORMANCE_METRIC,
                "heap-used",
                f"High memory usage: {round(heap_used / BYTES_PER_MB)}MB",
                value=heap_used,
                budget=self.heap_budget_mb * BYTES_PER_MB,
            )
            emitted += 1
        return emitted
