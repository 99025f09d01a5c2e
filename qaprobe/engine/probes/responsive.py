"""
Responsive probe: reloads the page at each configured viewport.

Findings per viewport:
- horizontal-overflow: document scroll width exceeds the viewport width
- zero-area-element: visible element with text but no rendered area

Zero-area detection is a heuristic for collapsed or overlapped content,
not a guarantee that nothing overlaps.
"""

import logging
from typing import Any, Dict, List, Optional

from qaprobe.core.config import settings

from ..contracts.results import TestResult
from ..contracts.signals import SignalKind
from .base import Probe
from .evaluators import JSEvaluators

logger = logging.getLogger("qaprobe.engine.probes.responsive")


class ResponsiveProbe(Probe):
    """Checks each viewport in order, then restores the session viewport."""

    name = "responsive"
    result_names = ("Responsive Design Test",)

    def __init__(self, viewports: Optional[List[Dict[str, Any]]] = None, timeout_ms: Optional[int] = None):
        self.viewports = viewports or settings.RESPONSIVE_VIEWPORTS
        self.timeout_ms = settings.SUITE_TIMEOUT_MS if timeout_ms is None else timeout_ms

    async def run(self, session) -> List[TestResult]:
        viewport_tests = []
        try:
            for viewport in self.viewports:
                viewport_tests.append(await self._check_viewport(session, viewport))
        finally:
            await self._restore(session)

        return [
            TestResult(
                name="Responsive Design Test",
                passed=all(v["passed"] for v in viewport_tests),
                details={"viewport_tests": viewport_tests},
            )
        ]

    async def _check_viewport(self, session, viewport: Dict[str, Any]) -> Dict[str, Any]:
        label = viewport.get("name") or f"{viewport['width']}x{viewport['height']}"
        record: Dict[str, Any] = {
            "viewport": label,
            "dimensions": f"{viewport['width']}x{viewport['height']}",
        }
        page = session.page
        try:
            await page.set_viewport_size({"width": viewport["width"], "height": viewport["height"]})
            await page.reload(wait_until="networkidle", timeout=self.timeout_ms)
            overflow = await page.evaluate(JSEvaluators.HORIZONTAL_OVERFLOW)
            zero_area = await page.evaluate(JSEvaluators.ZERO_AREA_ELEMENTS)
        except Exception as e:
            logger.warning(f"Viewport {label} check failed: {e}")
            record.update({"passed": False, "error": str(e)})
            return record

        has_overflow = bool(overflow.get("overflow"))
        if has_overflow:
            self.emit(
                session,
                SignalKind.LAYOUT_VIOLATION,
                "horizontal-overflow",
                f"Horizontal scroll detected on {label} ({viewport['width']}px)",
                locator="html",
                viewport=label,
                scroll_width=overflow.get("scrollWidth"),
                viewport_width=overflow.get("innerWidth"),
            )
        for element in zero_area:
            self.emit(
                session,
                SignalKind.LAYOUT_VIOLATION,
                "zero-area-element",
                f"Element {element['element']} has no rendered area on {label}",
                locator=element["element"],
                viewport=label,
            )

        record.update({
            "has_horizontal_scroll": has_overflow,
            "zero_area_elements": len(zero_area),
            "passed": not has_overflow and not zero_area,
        })
        return record

    async def _restore(self, session) -> None:
        try:
            await session.page.set_viewport_size(session.viewport.to_dict())
            await session.page.reload(wait_until="networkidle", timeout=self.timeout_ms)
        except Exception as e:
            logger.warning(f"Could not restore viewport {session.viewport.describe()}: {e}")
