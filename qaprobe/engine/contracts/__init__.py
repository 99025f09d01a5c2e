"""
Contracts - Data structures shared by every engine component.
"""

from .signals import Signal, SignalKind, Viewport, FilterFlags
from .issues import Severity, IssueRecord
from .results import StepOutcome, TestResult, QASummary
from .flows import StepAction, FlowStep, Flow
from .errors import QAProbeError, SessionError, ProbeError, StepError

__all__ = [
    # Signals
    "Signal",
    "SignalKind",
    "Viewport",
    "FilterFlags",
    # Issues
    "Severity",
    "IssueRecord",
    # Results
    "StepOutcome",
    "TestResult",
    "QASummary",
    # Flows
    "StepAction",
    "FlowStep",
    "Flow",
    # Errors
    "QAProbeError",
    "SessionError",
    "ProbeError",
    "StepError",
]
