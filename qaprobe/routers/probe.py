"""
Probe Router - HTTP surface for runSuite and monitorSignals.

HTTP handling only: request bodies are converted to engine contracts and
handed to the orchestrator or monitor. ProbeError is rendered by the
exception handler registered in qaprobe.main.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from qaprobe.deps import get_monitor, get_orchestrator
from qaprobe.engine.monitor import SignalMonitor
from qaprobe.engine.orchestrator import SuiteOrchestrator
from qaprobe.schemas.probe import MonitorRequest, SuiteRequest


# ---------------------------------------------------------------------------
# LOGGER SETUP
# ---------------------------------------------------------------------------
logger = logging.getLogger("qaprobe.routers.probe")


# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
router = APIRouter(prefix="/probe", tags=["probe"])


@router.post("/suite")
async def run_suite(
    request: SuiteRequest,
    orchestrator: SuiteOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    """
    Run a probe suite against a running application.

    Returns the QASummary: counts, issues in collection order, severity and
    category tallies, recommendations and every TestResult.
    """
    logger.info(f"Suite request: {request.test_suite.value} on {request.url}")
    summary = await orchestrator.run_suite(
        request.url,
        request.mode,
        flows=request.flows,
        viewport=request.viewport.to_viewport(),
    )
    return summary.to_dict()


@router.post("/monitor")
async def monitor_signals(
    request: MonitorRequest,
    monitor: SignalMonitor = Depends(get_monitor),
) -> Dict[str, Any]:
    """
    Capture console, network and security Signals for a bounded duration.

    Optional interactions run as one flow before the remaining time elapses.
    """
    logger.info(f"Monitor request: {request.url} for {request.duration}ms")
    report = await monitor.monitor(
        request.url,
        duration_ms=request.duration,
        filters=request.filters.to_flags(),
        interactions=[i.to_step() for i in request.interactions],
    )
    return report.to_dict()
