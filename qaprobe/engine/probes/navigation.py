"""
Navigation probe: follows a bounded sample of same-origin links.

Link navigations run under `owned_navigation()` so the network collector
does not report the same broken link a second time. The original location
is restored whatever happens to the individual links.
"""

import logging
from typing import Any, Dict, List, Optional

from qaprobe.core.config import settings

from ..contracts.results import TestResult
from ..contracts.signals import SignalKind
from .base import Probe
from .evaluators import JSEvaluators

logger = logging.getLogger("qaprobe.engine.probes.navigation")


class NavigationProbe(Probe):
    """Reports every sampled link that does not answer with 2xx."""

    name = "navigation"
    result_names = ("Navigation Links Test",)

    def __init__(self, link_cap: Optional[int] = None, link_timeout_ms: Optional[int] = None):
        self.link_cap = settings.NAV_LINK_CAP if link_cap is None else link_cap
        self.link_timeout_ms = settings.NAV_LINK_TIMEOUT_MS if link_timeout_ms is None else link_timeout_ms

    async def run(self, session) -> List[TestResult]:
        page = session.page
        original_url = page.url
        inventory = await page.evaluate(JSEvaluators.LINK_INVENTORY)
        links = inventory.get("links", [])
        sample = links[: self.link_cap]

        working = 0
        broken: List[Dict[str, Any]] = []
        restore_error = None
        try:
            for link in sample:
                outcome = await self._follow(session, link["href"])
                if outcome is None:
                    working += 1
                else:
                    broken.append(outcome)
        finally:
            try:
                with session.signals.owned_navigation():
                    await page.goto(
                        original_url,
                        wait_until="networkidle",
                        timeout=settings.SUITE_TIMEOUT_MS,
                    )
            except Exception as e:
                restore_error = str(e)
                logger.warning(f"Could not restore {original_url}: {e}")

        details = {
            "total_links_found": len(links),
            "links_tested_count": len(sample),
            "working_links": working,
            "broken_links": len(broken),
            "broken_link_details": broken,
        }
        if restore_error:
            details["restore_error"] = restore_error
        return [
            TestResult(
                name="Navigation Links Test",
                passed=not broken and restore_error is None,
                details=details,
                error=restore_error,
            )
        ]

    async def _follow(self, session, href: str) -> Optional[Dict[str, Any]]:
        """Visit one link. Returns None when it works, else the broken-link record."""
        try:
            with session.signals.owned_navigation():
                response = await session.page.goto(
                    href,
                    wait_until="networkidle",
                    timeout=self.link_timeout_ms,
                )
        except Exception as e:
            self.emit(
                session,
                SignalKind.NETWORK_FAILURE,
                "broken-link",
                f"Link {href} failed: {e}",
                locator=href,
                href=href,
                error=str(e),
            )
            return {"href": href, "error": str(e)}

        status = response.status if response is not None else None
        if status is not None and 200 <= status < 300:
            return None

        self.emit(
            session,
            SignalKind.HTTP_ERROR_STATUS,
            "broken-link",
            f"Link {href} returned HTTP {status}",
            locator=href,
            href=href,
            status=status,
        )
        return {"href": href, "status": status}
