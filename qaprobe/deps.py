"""
Dependencies module - FastAPI dependencies for the probe routes.

Each request gets its own orchestrator/monitor so no engine state is
shared between concurrent invocations.
"""

from qaprobe.engine.monitor import SignalMonitor
from qaprobe.engine.orchestrator import SuiteOrchestrator


def get_orchestrator() -> SuiteOrchestrator:
    """Fresh SuiteOrchestrator per request. Override in tests."""
    return SuiteOrchestrator()


def get_monitor() -> SignalMonitor:
    """Fresh SignalMonitor per request. Override in tests."""
    return SignalMonitor()
