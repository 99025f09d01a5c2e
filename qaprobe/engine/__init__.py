"""
Probing engine - Drives one browser session through probes and flows and
reduces what it observes to a severity-ranked QASummary.

Public entry points:
    SuiteOrchestrator.run_suite(url, mode, flows, viewport)   -> QASummary
    SignalMonitor.monitor(url, duration_ms, filters, ...)     -> MonitorReport
"""

from .contracts import (
    FilterFlags,
    Flow,
    FlowStep,
    IssueRecord,
    ProbeError,
    QASummary,
    SessionError,
    Severity,
    Signal,
    SignalKind,
    StepAction,
    StepError,
    TestResult,
    Viewport,
)
from .monitor import MonitorReport, SignalMonitor
from .orchestrator import SuiteMode, SuiteOrchestrator

__all__ = [
    "FilterFlags",
    "Flow",
    "FlowStep",
    "IssueRecord",
    "ProbeError",
    "QASummary",
    "SessionError",
    "Severity",
    "Signal",
    "SignalKind",
    "StepAction",
    "StepError",
    "TestResult",
    "Viewport",
    "MonitorReport",
    "SignalMonitor",
    "SuiteMode",
    "SuiteOrchestrator",
]
