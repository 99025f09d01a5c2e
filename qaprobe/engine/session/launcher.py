"""
Browser Launcher - Starts one isolated Chromium per invocation.

Each call to `launch()` starts its own Playwright driver and browser
process; nothing is shared between invocations.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger("qaprobe.engine.session.launcher")


@dataclass
class BrowserHandle:
    """
    A live page plus the resources that must be released with it.

    `closers` run in order on close(); a failing closer is logged and the
    rest still run.
    """

    page: "Page"
    closers: List[Callable[[], Awaitable[Any]]] = field(default_factory=list)
    closed: bool = False

    async def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        for closer in self.closers:
            try:
                await closer()
            except Exception as e:
                logger.warning(f"Browser teardown step failed: {e}")


class PlaywrightLauncher:
    """
    Launches headless Chromium through Playwright's async API.

    Usage:
        launcher = PlaywrightLauncher()
        handle = await launcher.launch({"width": 1280, "height": 720})
        try:
            await handle.page.goto("http://localhost:3000")
        finally:
            await handle.close()
    """

    def __init__(self, headless: bool = True, args: Optional[List[str]] = None):
        self.headless = headless
        self.args = list(args or [])

    async def launch(self, viewport: Dict[str, int]) -> BrowserHandle:
        from playwright.async_api import async_playwright

        playwright = await async_playwright().start()
        try:
            browser = await playwright.chromium.launch(headless=self.headless, args=self.args)
            context = await browser.new_context(viewport=viewport)
            page = await context.new_page()
        except Exception:
            await playwright.stop()
            raise

        logger.debug(f"Launched Chromium (headless={self.headless}) at {viewport}")
        return BrowserHandle(
            page=page,
            closers=[page.close, context.close, browser.close, playwright.stop],
        )
