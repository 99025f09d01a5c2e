"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- A small fake site (home page with links, forms and images)
- A FakeLauncher-backed SessionManager
- An opened ProbeSession on the home page
- A real Playwright page serving an in-memory site (tests marked `playwright`)
"""

from typing import Dict
from urllib.parse import urljoin, urlparse

import pytest
import pytest_asyncio
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from qaprobe.engine.contracts import FilterFlags, Viewport
from qaprobe.engine.session import SessionManager
from tests.fakes import HOME, FakeLauncher, FakeRoute

# ---------------------------------------------------------------------------
# SITE FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def routes():
    """A one-page site that passes every check."""
    return {HOME: FakeRoute(title="Home", elements={"h1": "Welcome home"})}

@pytest.fixture
def launcher(routes):
    return FakeLauncher(routes)

@pytest.fixture
def manager(launcher):
    return SessionManager(launcher=launcher)

# ---------------------------------------------------------------------------
# SESSION FIXTURES
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def session(manager):
    """
    Opened session on HOME.

    Closed after the test even if the test already closed it.
    """
    opened = await manager.open(HOME, Viewport(), FilterFlags())
    try:
        yield opened
    finally:
        await manager.close(opened)

# ---------------------------------------------------------------------------
# PLAYWRIGHT FIXTURES
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def browser():
    """
    Real headless Chromium for tests marked `playwright`.

    Skipped when the browser binary has not been installed
    (`playwright install chromium`).
    """
    async with async_playwright() as p:
        try:
            browser = await p.chromium.launch(headless=True)
        except PlaywrightError as e:
            pytest.skip(f"Chromium not available: {e}")
        yield browser
        await browser.close()

@pytest_asyncio.fixture
async def page(browser):
    """Playwright page with the default 1280x720 viewport."""
    page = await browser.new_page(viewport={"width": 1280, "height": 720})
    yield page
    await page.close()

@pytest.fixture
def page_with_site(page):
    """
    Return a function that serves a small site on http://app.test and opens it.

    Usage:
        async def test_links(page_with_site):
            page = await page_with_site({"/": "<a href='/about'>About</a>"})

    Paths missing from the site answer 404 with an empty body.
    """
    async def _open(site: Dict[str, str], path: str = "/"):
        async def handle(route):
            body = site.get(urlparse(route.request.url).path)
            if body is None:
                await route.fulfill(status=404, body="")
            else:
                await route.fulfill(status=200, content_type="text/html", body=body)

        await page.route("http://app.test/**", handle)
        await page.goto(urljoin(HOME, path), wait_until="load")
        return page
    return _open
