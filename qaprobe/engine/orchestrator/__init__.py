"""
Orchestrator module - Suite selection and execution.

Usage:
    from qaprobe.engine.orchestrator import SuiteOrchestrator, SuiteMode

    orchestrator = SuiteOrchestrator()
    summary = await orchestrator.run_suite("http://localhost:3000", SuiteMode.BASIC)
"""

from .connectivity import CONNECTIVITY_TEST, connectivity_failure, connectivity_result
from .contracts import SUITE_PLANS, SuiteMode
from .suite_orchestrator import SuiteOrchestrator, auth_placeholder, default_probes

__all__ = [
    "CONNECTIVITY_TEST",
    "connectivity_failure",
    "connectivity_result",
    "SUITE_PLANS",
    "SuiteMode",
    "auth_placeholder",
    "SuiteOrchestrator",
    "default_probes",
]
