"""
Tests for SessionManager and ProbeSession lifetime.
"""

import asyncio
from unittest.mock import patch

import pytest

from qaprobe.engine.collectors import SecurityCollector
from qaprobe.engine.contracts import SessionError, SignalKind, Viewport
from qaprobe.engine.session import BrowserHandle, ListenerRegistry, SessionManager
from tests.fakes import HOME, FakeLauncher, FakePage, FakeRoute, page_error, subresource_response


class TestOpen:
    """Tests for SessionManager.open()."""

    @pytest.mark.asyncio
    async def test_open_navigates_and_attaches(self, manager, launcher):
        session = await manager.open(HOME, Viewport(375, 667))

        assert session.initial_status == 200
        assert session.final_url == HOME
        assert session.page.url == HOME
        assert launcher.viewports == [{"width": 375, "height": 667}]
        assert [c.name for c in session.collectors] == ["script_errors", "network", "security"]
        await manager.close(session)

    @pytest.mark.asyncio
    async def test_load_time_signals_are_kept(self):
        routes = {HOME: FakeRoute(events=[
            subresource_response("http://app.test/missing.js", 404),
            page_error("x is not defined"),
        ])}
        manager = SessionManager(launcher=FakeLauncher(routes))
        session = await manager.open(HOME)

        kinds = [s.kind for s in session.signals]
        assert kinds == [SignalKind.HTTP_ERROR_STATUS, SignalKind.SCRIPT_ERROR]
        assert all(s.probe == "session" for s in session.signals)
        await manager.close(session)

    @pytest.mark.asyncio
    async def test_redirect_status_opens(self):
        manager = SessionManager(launcher=FakeLauncher({HOME: FakeRoute(status=304)}))
        session = await manager.open(HOME)
        assert session.initial_status == 304
        await manager.close(session)

    @pytest.mark.asyncio
    async def test_error_status_raises_and_closes(self):
        launcher = FakeLauncher({HOME: FakeRoute(status=500)})
        manager = SessionManager(launcher=launcher)

        with pytest.raises(SessionError) as exc_info:
            await manager.open(HOME)

        assert exc_info.value.status == 500
        assert exc_info.value.target_url == HOME
        assert launcher.page.close_count == 1
        assert launcher.page.listener_count() == 0

    @pytest.mark.asyncio
    async def test_cancelled_navigation_closes(self):
        launcher = FakeLauncher({HOME: FakeRoute(interrupt=asyncio.CancelledError())})
        manager = SessionManager(launcher=launcher)

        with pytest.raises(asyncio.CancelledError):
            await manager.open(HOME)

        assert launcher.page.close_count == 1
        assert launcher.page.listener_count() == 0

    @pytest.mark.asyncio
    async def test_failing_collector_attach_closes(self, manager, launcher):
        with patch.object(SecurityCollector, "attach", side_effect=RuntimeError("attach failed")):
            with pytest.raises(RuntimeError, match="attach failed"):
                await manager.open(HOME)

        assert launcher.page.close_count == 1
        assert launcher.page.listener_count() == 0
        assert launcher.page.gotos == []

    @pytest.mark.asyncio
    async def test_transport_error_raises_with_message(self):
        launcher = FakeLauncher({HOME: FakeRoute(error="net::ERR_CONNECTION_REFUSED")})
        manager = SessionManager(launcher=launcher)

        with pytest.raises(SessionError) as exc_info:
            await manager.open(HOME)

        assert "ERR_CONNECTION_REFUSED" in exc_info.value.message
        assert exc_info.value.status is None
        assert launcher.page.close_count == 1

    @pytest.mark.asyncio
    async def test_owned_initial_navigation_is_not_double_reported(self):
        launcher = FakeLauncher({HOME: FakeRoute(error="net::ERR_CONNECTION_REFUSED")})
        manager = SessionManager(launcher=launcher)

        with pytest.raises(SessionError) as exc_info:
            await manager.open(HOME)
        assert exc_info.value.partial_signals == []

    @pytest.mark.asyncio
    async def test_launch_failure(self):
        manager = SessionManager(launcher=FakeLauncher({}, fail="Executable doesn't exist"))

        with pytest.raises(SessionError) as exc_info:
            await manager.open(HOME)
        assert "Executable doesn't exist" in exc_info.value.message
        assert exc_info.value.cause == "launch"


class TestClose:
    """Tests for teardown."""

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, manager, launcher):
        session = await manager.open(HOME)
        await manager.close(session)
        await manager.close(session)

        assert session.closed
        assert launcher.page.close_count == 1
        assert launcher.page.listener_count() == 0

    @pytest.mark.asyncio
    async def test_context_manager_closes_on_error(self, manager, launcher):
        with pytest.raises(RuntimeError):
            async with manager.session(HOME) as session:
                assert not session.closed
                raise RuntimeError("probe blew up")

        assert launcher.page.close_count == 1

    @pytest.mark.asyncio
    async def test_sessions_are_isolated(self, manager, launcher):
        first = await manager.open(HOME)
        second = await manager.open(HOME)

        first.page.fire(*page_error("only in first"))

        assert len(first.signals) == 1
        assert len(second.signals) == 0
        assert first.page is not second.page
        await manager.close(first)
        await manager.close(second)


class TestBrowserHandle:
    """Tests for BrowserHandle teardown."""

    @pytest.mark.asyncio
    async def test_failing_closer_does_not_stop_the_rest(self):
        calls = []

        async def broken():
            calls.append("broken")
            raise RuntimeError("already closed")

        async def stop():
            calls.append("stop")

        handle = BrowserHandle(page=FakePage({}), closers=[broken, stop])
        await handle.close()
        await handle.close()

        assert calls == ["broken", "stop"]


class TestListenerRegistry:
    def test_detach_all(self):
        page = FakePage({})
        registry = ListenerRegistry()
        registry.add(page, "console", lambda msg: None)
        registry.add(page, "response", lambda resp: None)

        assert page.listener_count() == 2
        assert registry.detach_all() == 2
        assert page.listener_count() == 0
        assert len(registry) == 0
