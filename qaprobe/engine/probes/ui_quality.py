"""
UI quality probe: text legibility and image alternative text.
"""

import logging
from typing import List, Optional

from qaprobe.core.config import settings

from ..contracts.results import TestResult
from ..contracts.signals import SignalKind
from .base import Probe
from .evaluators import JSEvaluators

logger = logging.getLogger("qaprobe.engine.probes.ui_quality")


class UIQualityProbe(Probe):
    """Flags text rendered below `min_font_px` and images lacking an alt attribute."""

    name = "ui_quality"
    result_names = ("UI Quality Assessment",)

    def __init__(self, min_font_px: Optional[float] = None):
        self.min_font_px = settings.MIN_FONT_SIZE_PX if min_font_px is None else min_font_px

    async def run(self, session) -> List[TestResult]:
        page = session.page
        small_text = await page.evaluate(JSEvaluators.SMALL_TEXT, self.min_font_px)
        missing_alt = await page.evaluate(JSEvaluators.MISSING_ALT)

        for element in small_text:
            self.emit(
                session,
                SignalKind.ACCESSIBILITY_VIOLATION,
                "small-text",
                f"Text too small in {element['element']}: {element.get('fontSize')}px",
                locator=element["element"],
                interactive=False,
                font_size=element.get("fontSize"),
            )
        for image in missing_alt:
            self.emit(
                session,
                SignalKind.ACCESSIBILITY_VIOLATION,
                "missing-alt",
                f"Image {image['element']} is missing alt text",
                locator=image["element"],
                interactive=False,
                src=image.get("src"),
            )

        found = len(small_text) + len(missing_alt)
        return [
            TestResult(
                name="UI Quality Assessment",
                passed=found == 0,
                details={
                    "issues_found": found,
                    "small_text_count": len(small_text),
                    "missing_alt_count": len(missing_alt),
                    "min_font_px": self.min_font_px,
                },
            )
        ]
