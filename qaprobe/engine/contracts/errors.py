"""
Error taxonomy for the probing engine.

- SessionError: session could not be opened or its initial navigation failed.
  Fatal to the invocation; surfaced as a critical connectivity issue.
- ProbeError: an invocation could not produce a summary. Carries whatever
  was captured before the fault.
- StepError: one interaction step failed. Recorded at step granularity.
"""

from typing import Optional, Sequence


class QAProbeError(Exception):
    """Base class for engine errors."""


class SessionError(QAProbeError):
    """
    Initial navigation or browser launch failed.

    `cause` is "launch" when the local browser never started (the target
    was not contacted) and "navigation" otherwise.
    """

    def __init__(
        self,
        message: str,
        target_url: str,
        status: Optional[int] = None,
        partial_signals: Sequence = (),
        cause: str = "navigation",
    ):
        super().__init__(message)
        self.message = message
        self.target_url = target_url
        self.status = status
        self.partial_signals = list(partial_signals)
        self.cause = cause


class ProbeError(QAProbeError):
    """An invocation faulted outside any individual probe."""

    def __init__(
        self,
        message: str,
        partial_results: Sequence = (),
        partial_signals: Sequence = (),
    ):
        super().__init__(message)
        self.message = message
        self.partial_results = list(partial_results)
        self.partial_signals = list(partial_signals)


class StepError(QAProbeError):
    """A scripted step could not be performed."""

    def __init__(self, step_index: int, action: str, message: str):
        super().__init__(f"Step {step_index} ({action}) failed: {message}")
        self.step_index = step_index
        self.action = action
        self.message = message
