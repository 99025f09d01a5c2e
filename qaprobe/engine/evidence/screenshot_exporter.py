"""
ScreenshotExporter - Screenshot collaborator for flow evidence steps.

Captures the page (or one element) and writes a PNG to disk. The returned
path is stored opaquely in the step outcome; nothing else reads it.
"""

import logging
import os
from datetime import datetime
from typing import Optional

from qaprobe.core.config import settings

logger = logging.getLogger("qaprobe.engine.evidence")


class ScreenshotExporter:
    """
    Writes evidence screenshots under a per-run directory.

    Directory structure:
        {base_dir}/
            {run_id}/
                001_checkout_step_3.png
                002_checkout_step_5_button_pay.png

    Usage:
        exporter = ScreenshotExporter("/tmp/qa-evidence")
        path = await exporter.capture(page, "checkout", step_index=3)
    """

    def __init__(self, base_dir: Optional[str] = None, run_id: Optional[str] = None):
        """
        Initialize the exporter.

        Args:
            base_dir: Base directory for all evidence.
                      Defaults to settings.EVIDENCE_DIR
            run_id: Sub-directory name. Defaults to a timestamp
        """
        self.base_dir = base_dir or settings.EVIDENCE_DIR
        self.run_id = run_id or datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        self._counter = 0

    async def capture(
        self,
        page,
        flow_name: str,
        step_index: int,
        selector: Optional[str] = None,
    ) -> str:
        """
        Screenshot the page, or the element at `selector`, and save it.

        Raises:
            LookupError: `selector` matched nothing
            OSError: the file could not be written
        """
        if selector:
            element = await page.query_selector(selector)
            if element is None:
                raise LookupError(f"No element matches {selector}")
            data = await element.screenshot()
        else:
            data = await page.screenshot(full_page=True)

        self._counter += 1
        name = f"{self._counter:03d}_{self._sanitize(flow_name)}_step_{step_index}"
        if selector:
            name = f"{name}_{self._sanitize(selector)}"

        run_dir = self.get_run_dir()
        os.makedirs(run_dir, exist_ok=True)
        path = os.path.join(run_dir, f"{name}.png")
        if not self._save_png(data, path):
            raise OSError(f"Could not write screenshot to {path}")

        logger.debug(f"Saved evidence screenshot to {path}")
        return path

    def get_run_dir(self) -> str:
        return os.path.join(self.base_dir, self.run_id)

    def _save_png(self, data: bytes, path: str) -> bool:
        try:
            with open(path, "wb") as f:
                f.write(data)
            return True
        except Exception as e:
            logger.warning(f"Failed to save screenshot to {path}: {e}")
            return False

    def _sanitize(self, text: str) -> str:
        """Convert a selector or flow name to a safe filename component."""
        safe = text
        for char in ".#[]='\"(){}:> ,+~/\\":
            safe = safe.replace(char, "_")
        while "__" in safe:
            safe = safe.replace("__", "_")
        return safe[:40].strip("_") or "page"
