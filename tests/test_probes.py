"""
Tests for DOM probes.

Each probe runs against a FakePage whose JS evaluations are scripted per
route, so the tests exercise the judging and Signal emission without a
browser.
"""

import pytest

from qaprobe.engine.classifier import IssueClassifier
from qaprobe.engine.contracts import Severity, SignalKind
from qaprobe.engine.probes import (
    BasicProbe,
    FormsProbe,
    JSEvaluators,
    NavigationProbe,
    PerformanceProbe,
    Probe,
    ResponsiveProbe,
    UIQualityProbe,
)
from qaprobe.engine.session import SessionManager
from tests.fakes import HOME, FakeLauncher, FakeRoute, page_error


async def open_session(routes):
    manager = SessionManager(launcher=FakeLauncher(routes))
    return manager, await manager.open(HOME)


def links(*hrefs):
    return {"origin": "http://app.test", "current": HOME, "links": [{"href": h, "text": h} for h in hrefs]}


class TestBasicProbe:
    """Tests for title, images and script errors."""

    @pytest.mark.asyncio
    async def test_clean_page_passes(self, session):
        results = await BasicProbe(settle_ms=0).execute(session)

        assert [r.name for r in results] == [
            "Page Title Check",
            "Broken Images Check",
            "JavaScript Errors Check",
        ]
        assert all(r.passed for r in results)
        assert len(session.signals) == 0

    @pytest.mark.asyncio
    async def test_findings(self):
        routes = {HOME: FakeRoute(
            title="  ",
            evaluations={JSEvaluators.BROKEN_IMAGES: [
                {"index": 0, "element": "img[0]", "src": "/a.png"},
                {"index": 2, "element": "img[2]", "src": "/b.png"},
            ]},
            events=[page_error("undefined is not a function")],
        )}
        manager, session = await open_session(routes)

        results = await BasicProbe(settle_ms=0).execute(session)

        title, images, errors = results
        assert not title.passed
        assert images.details["broken_image_count"] == 2
        assert not errors.passed
        assert errors.details["errors"] == ["undefined is not a function"]

        rules = [s.rule for s in session.signals if s.probe == "basic"]
        assert rules == ["missing-title", "broken-image", "broken-image"]
        await manager.close(session)

    @pytest.mark.asyncio
    async def test_settle_wait(self, session):
        await BasicProbe(settle_ms=2000).execute(session)
        assert session.page.waits == [2000]


class TestNavigationProbe:
    """Tests for the navigation-links probe."""

    @pytest.mark.asyncio
    async def test_broken_link_restores_location(self):
        """Three internal links, one 404: location restored, one Navigation issue."""
        routes = {
            HOME: FakeRoute(evaluations={JSEvaluators.LINK_INVENTORY: links(
                "http://app.test/about",
                "http://app.test/pricing",
                "http://app.test/gone",
            )}),
            "http://app.test/about": FakeRoute(),
            "http://app.test/pricing": FakeRoute(),
            "http://app.test/gone": FakeRoute(status=404),
        }
        manager, session = await open_session(routes)

        [result] = await NavigationProbe().execute(session)

        assert session.page.url == HOME
        assert not result.passed
        assert result.details["working_links"] == 2
        assert result.details["broken_links"] == 1

        signals = session.signals.snapshot()
        assert len(signals) == 1
        issues = IssueClassifier().classify_all(signals)
        navigation = [i for i in issues if i.category == "Navigation"]
        assert len(navigation) == 1
        assert navigation[0].count == 1
        assert navigation[0].severity is Severity.MAJOR
        await manager.close(session)

    @pytest.mark.asyncio
    async def test_transport_error_is_broken(self):
        routes = {
            HOME: FakeRoute(evaluations={JSEvaluators.LINK_INVENTORY: links("http://app.test/slow")}),
            "http://app.test/slow": FakeRoute(error="Timeout 5000ms exceeded"),
        }
        manager, session = await open_session(routes)

        [result] = await NavigationProbe().execute(session)

        assert result.details["broken_link_details"][0]["error"] == "Timeout 5000ms exceeded"
        [signal] = session.signals.snapshot()
        assert signal.kind is SignalKind.NETWORK_FAILURE
        assert signal.probe == "navigation"
        assert session.page.url == HOME
        await manager.close(session)

    @pytest.mark.asyncio
    async def test_link_cap(self):
        hrefs = [f"http://app.test/p{i}" for i in range(15)]
        routes = {HOME: FakeRoute(evaluations={JSEvaluators.LINK_INVENTORY: links(*hrefs)})}
        routes.update({h: FakeRoute() for h in hrefs})
        manager, session = await open_session(routes)

        [result] = await NavigationProbe(link_cap=10).execute(session)

        assert result.passed
        assert result.details["total_links_found"] == 15
        assert result.details["links_tested_count"] == 10
        # initial open + 10 links + restore
        assert len(session.page.gotos) == 12
        await manager.close(session)


class TestFormsProbe:
    """Tests for form structure and labels."""

    @pytest.mark.asyncio
    async def test_findings(self):
        routes = {HOME: FakeRoute(evaluations={
            JSEvaluators.FORM_STRUCTURE: [
                {"index": 0, "element": "form[0]", "hasSubmitButton": True},
                {"index": 1, "element": "form[1]", "hasSubmitButton": False},
            ],
            JSEvaluators.MISSING_LABELS: [
                {"index": 3, "element": "input[3]", "type": "email"},
            ],
        })}
        manager, session = await open_session(routes)

        structure, labels = await FormsProbe().execute(session)

        assert not structure.passed
        assert structure.details["forms_found"] == 2
        assert not labels.passed
        assert [s.rule for s in session.signals] == ["form-missing-submit", "missing-label"]
        assert all(s.detail["interactive"] for s in session.signals)
        await manager.close(session)

    @pytest.mark.asyncio
    async def test_one_check_failing_does_not_hide_the_other(self):
        def explode(page, arg):
            raise RuntimeError("Execution context was destroyed")

        routes = {HOME: FakeRoute(evaluations={JSEvaluators.FORM_STRUCTURE: explode})}
        manager, session = await open_session(routes)

        structure, labels = await FormsProbe().execute(session)

        assert structure.error == "Execution context was destroyed"
        assert labels.passed
        await manager.close(session)


class TestResponsiveProbe:
    """Tests for the responsive probe."""

    @pytest.mark.asyncio
    async def test_overflow_on_mobile_only(self):
        def overflow(page, arg):
            width = page.viewport["width"]
            return {"overflow": width < 400, "scrollWidth": 420, "innerWidth": width}

        routes = {HOME: FakeRoute(evaluations={JSEvaluators.HORIZONTAL_OVERFLOW: overflow})}
        manager, session = await open_session(routes)

        [result] = await ResponsiveProbe().execute(session)

        tests = result.details["viewport_tests"]
        assert [t["viewport"] for t in tests] == ["Mobile", "Tablet", "Desktop"]
        assert [t["passed"] for t in tests] == [False, True, True]

        [signal] = session.signals.snapshot()
        assert signal.rule == "horizontal-overflow"
        assert signal.detail["viewport"] == "Mobile"
        await manager.close(session)

    @pytest.mark.asyncio
    async def test_restores_session_viewport(self, session):
        await ResponsiveProbe().execute(session)

        assert session.page.viewport_history[-1] == {"width": 1280, "height": 720}
        assert session.page.reloads == 4

    @pytest.mark.asyncio
    async def test_zero_area_elements(self):
        routes = {HOME: FakeRoute(evaluations={
            JSEvaluators.ZERO_AREA_ELEMENTS: [{"index": 4, "element": "span[4]"}],
        })}
        manager, session = await open_session(routes)

        [result] = await ResponsiveProbe(viewports=[{"name": "Mobile", "width": 375, "height": 667}]).execute(session)

        assert not result.passed
        assert [s.rule for s in session.signals] == ["zero-area-element"]
        await manager.close(session)


class TestUIQualityProbe:
    """Tests for text size and alt text."""

    @pytest.mark.asyncio
    async def test_findings(self):
        seen_args = []

        def small_text(page, arg):
            seen_args.append(arg)
            return [{"element": "small[7]", "fontSize": 10}]

        routes = {HOME: FakeRoute(evaluations={
            JSEvaluators.SMALL_TEXT: small_text,
            JSEvaluators.MISSING_ALT: [
                {"element": "img[0]", "src": "/a.png"},
                {"element": "img[1]", "src": "/b.png"},
            ],
        })}
        manager, session = await open_session(routes)

        [result] = await UIQualityProbe().execute(session)

        assert seen_args == [12]
        assert result.details["issues_found"] == 3
        assert [s.rule for s in session.signals] == ["small-text", "missing-alt", "missing-alt"]
        assert not any(s.detail["interactive"] for s in session.signals)
        await manager.close(session)


class TestPerformanceProbe:
    """Tests for the performance budgets."""

    @pytest.mark.asyncio
    async def test_within_budget(self, session):
        [result] = await PerformanceProbe().execute(session)
        assert result.passed
        assert result.details["metrics"]["loadTime"] == 120.0

    @pytest.mark.asyncio
    async def test_over_budget(self):
        routes = {HOME: FakeRoute(evaluations={JSEvaluators.PERFORMANCE_METRICS: {
            "loadTime": 4200.0,
            "heapUsed": 80 * 1024 * 1024,
        }})}
        manager, session = await open_session(routes)

        [result] = await PerformanceProbe().execute(session)

        assert not result.passed
        assert [s.rule for s in session.signals] == ["load-time", "heap-used"]
        assert "80MB" in session.signals.snapshot()[1].message
        await manager.close(session)

    @pytest.mark.asyncio
    async def test_missing_heap_is_skipped(self):
        routes = {HOME: FakeRoute(evaluations={JSEvaluators.PERFORMANCE_METRICS: {
            "loadTime": 100.0,
            "heapUsed": None,
        }})}
        manager, session = await open_session(routes)

        [result] = await PerformanceProbe().execute(session)

        assert result.passed
        await manager.close(session)


class TestExplicitZeroOverrides:
    """Zero is a real setting, not a request for the default."""

    def test_zero_overrides_are_kept(self):
        assert NavigationProbe(link_cap=0, link_timeout_ms=0).link_timeout_ms == 0
        assert UIQualityProbe(min_font_px=0).min_font_px == 0
        performance = PerformanceProbe(load_budget_ms=0, heap_budget_mb=0)
        assert performance.load_budget_ms == 0
        assert performance.heap_budget_mb == 0
        assert ResponsiveProbe(timeout_ms=0).timeout_ms == 0

    @pytest.mark.asyncio
    async def test_zero_load_budget_flags_any_load(self, session):
        [result] = await PerformanceProbe(load_budget_ms=0).execute(session)

        assert not result.passed
        assert [s.rule for s in session.signals] == ["load-time"]


class TestProbeContainment:
    """A probe fault becomes failed TestResults; earlier Signals survive."""

    @pytest.mark.asyncio
    async def test_fault_is_contained(self, session):
        class ExplodingProbe(Probe):
            name = "exploding"
            result_names = ("First", "Second")

            async def run(self, session):
                session.signals.emit(SignalKind.LAYOUT_VIOLATION, "found before crash")
                raise RuntimeError("Target closed")

        results = await ExplodingProbe().execute(session)

        assert [(r.name, r.passed, r.error) for r in results] == [
            ("First", False, "Target closed"),
            ("Second", False, "Target closed"),
        ]
        [signal] = session.signals.snapshot()
        assert signal.probe == "exploding"
        assert session.signals.current_phase == "session"
