"""
Basic probe: page title, broken images and JavaScript errors.
"""

import logging
from typing import List, Optional

from qaprobe.core.config import settings

from ..contracts.results import TestResult
from ..contracts.signals import SignalKind
from .base import Probe
from .evaluators import JSEvaluators

logger = logging.getLogger("qaprobe.engine.probes.basic")


class BasicProbe(Probe):
    """
    Checks every page should pass.

    The JavaScript Errors Check waits `settle_ms` for late errors, then
    passes iff the session holds no script-error Signal at all.
    """

    name = "basic"
    result_names = ("Page Title Check", "Broken Images Check", "JavaScript Errors Check")

    def __init__(self, settle_ms: Optional[int] = None):
        self.settle_ms = settings.SCRIPT_ERROR_SETTLE_MS if settle_ms is None else settle_ms

    async def run(self, session) -> List[TestResult]:
        return [
            await self._check_title(session),
            await self._check_images(session),
            await self._check_script_errors(session),
        ]

    async def _check_title(self, session) -> TestResult:
        try:
            title = await session.page.title()
        except Exception as e:
            return self.failed("Page Title Check", e)

        passed = bool(title and title.strip())
        if not passed:
            self.emit(
                session,
                SignalKind.ACCESSIBILITY_VIOLATION,
                "missing-title",
                "Page title is missing or empty",
                locator="title",
                interactive=False,
            )
        return TestResult(name="Page Title Check", passed=passed, details={"title": title})

    async def _check_images(self, session) -> TestResult:
        try:
            broken = await session.page.evaluate(JSEvaluators.BROKEN_IMAGES)
        except Exception as e:
            return self.failed("Broken Images Check", e)

        for image in broken:
            self.emit(
                session,
                SignalKind.LAYOUT_VIOLATION,
                "broken-image",
                f"Image failed to load: {image.get('src') or image['element']}",
                locator=image["element"],
                src=image.get("src"),
            )
        return TestResult(
            name="Broken Images Check",
            passed=not broken,
            details={"broken_image_count": len(broken), "images": broken},
        )

    async def _check_script_errors(self, session) -> TestResult:
        try:
            if self.settle_ms > 0:
                await session.page.wait_for_timeout(self.settle_ms)
        except Exception as e:
            return self.failed("JavaScript Errors Check", e)

        errors = session.signals.of_kind(SignalKind.SCRIPT_ERROR)
        return TestResult(
            name="JavaScript Errors Check",
            passed=not errors,
            details={"error_count": len(errors), "errors": [s.message for s in errors]},
        )
