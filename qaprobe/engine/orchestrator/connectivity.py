"""
Connectivity - The check every run performs first.

A session that opened gets a Connectivity Test that passes iff the initial
status was 200. A session that could not open gets a failed Connectivity
Test plus exactly one critical Connectivity issue; the Signals captured
before the failure are kept in the test details rather than classified.
"""

from typing import Tuple

from ..classifier import IssueClassifier
from ..contracts.errors import SessionError
from ..contracts.issues import IssueRecord
from ..contracts.results import TestResult
from ..contracts.signals import Signal, SignalKind

CONNECTIVITY_TEST = "Connectivity Test"


def connectivity_result(session) -> TestResult:
    status = session.initial_status
    passed = status == 200
    return TestResult(
        name=CONNECTIVITY_TEST,
        passed=passed,
        details={
            "status": status,
            "load_time_ms": round(session.initial_load_ms, 2),
            "final_url": session.final_url,
        },
        error=None if passed else f"Initial navigation returned HTTP {status}",
    )


def connectivity_failure(
    error: SessionError,
    classifier: IssueClassifier,
) -> Tuple[TestResult, IssueRecord, Signal]:
    """Build the result, issue and Signal reported for an unopenable session."""
    if error.cause == "launch":
        message = f"Browser could not be started to test {error.target_url}: {error.message}"
    else:
        message = f"Cannot reach {error.target_url}: {error.message}"
    signal = Signal(
        kind=SignalKind.NETWORK_FAILURE if error.status is None else SignalKind.HTTP_ERROR_STATUS,
        message=message,
        locator=error.target_url,
        detail={
            "probe": "connectivity",
            "rule": "connectivity",
            "status": error.status,
            "cause": error.cause,
        },
    )
    result = TestResult(
        name=CONNECTIVITY_TEST,
        passed=False,
        details={
            "status": error.status,
            "cause": error.cause,
            "partial_signals": [s.to_dict() for s in error.partial_signals],
        },
        error=error.message,
    )
    return result, classifier.classify(signal), signal
