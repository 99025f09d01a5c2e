"""
Probe - Abstract base class for DOM probes.

A probe is a query-and-judge step invoked explicitly by the orchestrator.
It reports its findings as one Signal per offending element and returns
one or more TestResults.

Usage:
    class TitleProbe(Probe):
        name = "title"
        result_names = ("Title Check",)

        async def run(self, session) -> List[TestResult]:
            title = await session.page.title()
            return [TestResult("Title Check", passed=bool(title))]
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from ..contracts.results import TestResult
from ..contracts.signals import SignalKind

logger = logging.getLogger("qaprobe.engine.probes")


class Probe(ABC):
    """
    Abstract base class for DOM probes.

    Subclasses must implement:
    - name: phase name Signals are attributed to
    - result_names: TestResult names reported when the whole probe faults
    - run(): the probe body
    """

    name: str = "probe"
    result_names: Tuple[str, ...] = ()

    async def execute(self, session) -> List[TestResult]:
        """
        Run the probe inside its phase, containing any fault.

        A fault that escapes run() becomes one failed TestResult per
        declared result name; Signals already emitted are kept.
        """
        with session.signals.phase(self.name):
            try:
                results = await self.run(session)
            except Exception as e:
                logger.error(f"Probe '{self.name}' failed: {e}")
                results = [
                    TestResult(name=result_name, passed=False, error=str(e))
                    for result_name in (self.result_names or (self.name,))
                ]
        return results

    @abstractmethod
    async def run(self, session) -> List[TestResult]:
        """
        Probe body.

        Args:
            session: The live ProbeSession

        Returns:
            TestResults in report order
        """
        pass

    def emit(
        self,
        session,
        kind: SignalKind,
        rule: str,
        message: str,
        locator: Optional[str] = None,
        **detail: Any,
    ) -> None:
        """Emit one finding tagged with its rule."""
        payload: Dict[str, Any] = {"rule": rule}
        payload.update(detail)
        session.signals.emit(kind, message, locator=locator, detail=payload)

    @staticmethod
    def failed(name: str, error: Exception) -> TestResult:
        return TestResult(name=name, passed=False, error=str(error))
