"""
Probe Session Manager - Owns the single live page of one invocation.

Responsibilities:
- Launch an isolated browser and page at the requested viewport
- Attach the collectors (through a session-owned listener registry)
  before the first byte is loaded
- Perform the initial navigation with a hard timeout
- Tear everything down exactly once on every exit path

Usage:
    manager = SessionManager()
    async with manager.session("http://localhost:3000", Viewport()) as session:
        title = await session.page.title()
    # browser is closed here, even if the block raised
"""

import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, AsyncIterator, List, Optional

from qaprobe.core.config import settings

from ..collectors import SignalStore, build_collectors
from ..contracts.errors import SessionError
from ..contracts.signals import FilterFlags, Viewport
from .launcher import BrowserHandle, PlaywrightLauncher
from .listeners import ListenerRegistry

logger = logging.getLogger("qaprobe.engine.session")


@dataclass
class ProbeSession:
    """One browser page bound to one target for one invocation."""

    target_url: str
    viewport: Viewport
    handle: BrowserHandle
    signals: SignalStore = field(default_factory=SignalStore)
    listeners: ListenerRegistry = field(default_factory=ListenerRegistry)
    collectors: List[Any] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    initial_status: Optional[int] = None
    """HTTP status of the initial navigation response."""

    initial_load_ms: float = 0.0
    final_url: Optional[str] = None
    closed: bool = False

    @property
    def page(self):
        return self.handle.page

    @property
    def console_messages(self) -> List[dict]:
        for collector in self.collectors:
            messages = getattr(collector, "console_messages", None)
            if messages is not None:
                return messages
        return []


class SessionManager:
    """
    Creates and destroys ProbeSessions.

    `open()` either returns a navigated session or raises SessionError with
    the browser already released. `close()` is idempotent.
    """

    def __init__(self, launcher=None):
        self._launcher = launcher or PlaywrightLauncher(
            headless=settings.BROWSER_HEADLESS,
            args=settings.BROWSER_ARGS,
        )

    async def open(
        self,
        target_url: str,
        viewport: Optional[Viewport] = None,
        filters: Optional[FilterFlags] = None,
        timeout_ms: Optional[int] = None,
    ) -> ProbeSession:
        """
        Launch, attach collectors and navigate to `target_url`.

        Raises:
            SessionError: launch failed, navigation threw or timed out, or the
                response status was outside 2xx/3xx.
        """
        viewport = viewport or Viewport()
        filters = filters or FilterFlags()
        if timeout_ms is None:
            timeout_ms = settings.SUITE_TIMEOUT_MS

        try:
            handle = await self._launcher.launch(viewport.to_dict())
        except Exception as e:
            raise SessionError(f"Browser launch failed: {e}", target_url, cause="launch") from e

        session = ProbeSession(target_url=target_url, viewport=viewport, handle=handle)
        # Once launched, the browser is released on every exit path,
        # cancellation included.
        try:
            for collector in build_collectors(filters):
                collector.attach(session)
                session.collectors.append(collector)
            await self._navigate(session, timeout_ms)
        except BaseException:
            await self.close(session)
            raise

        logger.info(
            f"Session opened for {target_url} "
            f"(status={session.initial_status}, load={session.initial_load_ms:.0f}ms)"
        )
        return session

    async def _navigate(self, session: ProbeSession, timeout_ms: int) -> None:
        start = time.monotonic()
        with session.signals.owned_navigation():
            try:
                response = await session.page.goto(
                    session.target_url,
                    wait_until="networkidle",
                    timeout=timeout_ms,
                )
            except Exception as e:
                raise SessionError(
                    str(e),
                    session.target_url,
                    partial_signals=session.signals.snapshot(),
                ) from e

        session.initial_load_ms = (time.monotonic() - start) * 1000
        status = response.status if response is not None else None
        session.initial_status = status
        session.final_url = response.url if response is not None else session.page.url

        if status is None or not 200 <= status < 400:
            raise SessionError(
                f"HTTP {status}" if status is not None else "No response for initial navigation",
                session.target_url,
                status=status,
                partial_signals=session.signals.snapshot(),
            )

    async def close(self, session: ProbeSession) -> None:
        """Detach listeners and release the browser. Safe to call twice."""
        if session.closed:
            return
        session.closed = True
        detached = session.listeners.detach_all()
        await session.handle.close()
        logger.debug(f"Session for {session.target_url} closed ({detached} listeners detached)")

    @asynccontextmanager
    async def session(
        self,
        target_url: str,
        viewport: Optional[Viewport] = None,
        filters: Optional[FilterFlags] = None,
        timeout_ms: Optional[int] = None,
    ) -> AsyncIterator[ProbeSession]:
        """Scoped acquisition: the session is closed on every exit path."""
        session = await self.open(target_url, viewport, filters, timeout_ms)
        try:
            yield session
        finally:
            await self.close(session)
