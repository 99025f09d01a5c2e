"""
Interaction Runner - Executes scripted flows against the live page.

Failure policy:
- A failing step marks itself and its flow as failed; later steps still run
- A failing navigate step skips the rest of its flow (the page is unusable)
- Every failing step emits one step-failed Signal
- Every failing flow emits exactly one flow-failed Signal

Steps are folded into a list of StepOutcomes; expected per-step failures
never unwind past `_run_step`.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

from qaprobe.core.config import settings

from ..contracts.errors import StepError
from ..contracts.flows import Flow, FlowStep, StepAction
from ..contracts.results import StepOutcome, TestResult
from ..contracts.signals import SignalKind

logger = logging.getLogger("qaprobe.engine.interaction")

SKIPPED_AFTER_NAVIGATION = "Skipped: an earlier navigate step failed"


class InteractionRunner:
    """
    Runs flows step by step and reports one TestResult per flow.

    Usage:
        runner = InteractionRunner(evidence=ScreenshotExporter())
        flow = Flow.from_dict({"name": "login", "steps": [...]})
        result = await runner.run_flow(session, flow)
        if not result.passed:
            print(result.failed_steps)
    """

    def __init__(self, evidence=None, default_timeout_ms: Optional[int] = None):
        """
        Args:
            evidence: Screenshot collaborator with an async
                      capture(page, flow_name, step_index, selector) -> str.
                      Screenshot steps fail when it is missing.
            default_timeout_ms: Timeout for steps that do not set one
        """
        self.evidence = evidence
        self.default_timeout_ms = (
            settings.DEFAULT_STEP_TIMEOUT_MS if default_timeout_ms is None else default_timeout_ms
        )

    async def run_flow(self, session, flow: Flow) -> TestResult:
        """Run every step of `flow` under the phase `flow:<name>`."""
        with session.signals.phase(f"flow:{flow.name}"):
            outcomes: List[StepOutcome] = []
            aborted = False

            for index, step in enumerate(flow.steps, start=1):
                if aborted:
                    outcomes.append(StepOutcome(
                        step_index=index,
                        action=step.action.value,
                        selector=step.selector,
                        value=step.value,
                        error=SKIPPED_AFTER_NAVIGATION,
                        skipped=True,
                    ))
                    continue

                outcome = await self._run_step(session, flow, index, step)
                outcomes.append(outcome)
                if not outcome.passed:
                    self._emit_step_failure(session, flow, outcome)
                    if step.action is StepAction.NAVIGATE:
                        aborted = True

            result = self._build_result(flow, outcomes)
            if not result.passed:
                self._emit_flow_failure(session, flow, result)

        logger.info(f"Flow '{flow.name}': {'PASSED' if result.passed else 'FAILED'}")
        return result

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def _run_step(self, session, flow: Flow, index: int, step: FlowStep) -> StepOutcome:
        outcome = StepOutcome(
            step_index=index,
            action=step.action.value,
            selector=step.selector,
            value=step.value,
        )
        try:
            await self._perform(session, flow, index, step, outcome)
        except StepError as e:
            outcome.passed = False
            outcome.error = e.message
        except Exception as e:
            outcome.passed = False
            outcome.error = str(e)
        return outcome

    async def _perform(
        self,
        session,
        flow: Flow,
        index: int,
        step: FlowStep,
        outcome: StepOutcome,
    ) -> None:
        page = session.page
        action = step.action
        timeout = self.default_timeout_ms if step.timeout_ms is None else step.timeout_ms

        if action.needs_selector and not step.selector:
            raise StepError(index, action.value, "selector is required")

        if action is StepAction.NAVIGATE:
            if not step.value:
                raise StepError(index, action.value, "value (URL) is required")
            target = urljoin(page.url or session.target_url, step.value)
            await page.goto(target, wait_until="networkidle", timeout=timeout)
            outcome.passed = True

        elif action is StepAction.CLICK:
            await page.wait_for_selector(step.selector, timeout=timeout)
            await page.click(step.selector, timeout=timeout)
            outcome.passed = True

        elif action is StepAction.TYPE:
            if step.value is None:
                raise StepError(index, action.value, "value is required")
            await page.wait_for_selector(step.selector, timeout=timeout)
            await page.fill(step.selector, step.value, timeout=timeout)
            outcome.passed = True

        elif action is StepAction.WAIT:
            if step.selector:
                await page.wait_for_selector(step.selector, timeout=timeout)
            else:
                await page.wait_for_timeout(timeout)
            outcome.passed = True

        elif action is StepAction.SCREENSHOT:
            if self.evidence is None:
                raise StepError(index, action.value, "no screenshot collaborator configured")
            outcome.evidence = await self.evidence.capture(page, flow.name, index, step.selector)
            outcome.passed = True

        elif action is StepAction.VERIFY:
            if step.expected is None:
                raise StepError(index, action.value, "expected is required")
            # A missing element is a failed comparison, not an error.
            element = await page.query_selector(step.selector)
            text = await element.text_content() if element is not None else None
            expected = step.expected
            outcome.actual_value = text
            outcome.expected_value = step.expected
            outcome.passed = text is not None and expected in text
            if not outcome.passed:
                outcome.error = (
                    f"Element {step.selector} not found"
                    if text is None
                    else f"Expected text {expected!r} not found"
                )

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def _build_result(self, flow: Flow, outcomes: List[StepOutcome]) -> TestResult:
        failed = [o for o in outcomes if not o.passed and not o.skipped]
        skipped = [o for o in outcomes if o.skipped]
        details: Dict[str, Any] = {
            "steps_total": len(outcomes),
            "steps_passed": sum(1 for o in outcomes if o.passed),
            "steps_failed": len(failed),
            "steps_skipped": len(skipped),
        }
        evidence = [o.evidence for o in outcomes if o.evidence]
        if evidence:
            details["evidence"] = evidence
        if failed:
            details["first_failed_step"] = failed[0].step_index

        return TestResult(
            name=f"User Flow: {flow.name}",
            passed=not failed,
            details=details,
            error=failed[0].error if failed else None,
            steps=outcomes,
        )

    def _emit_step_failure(self, session, flow: Flow, outcome: StepOutcome) -> None:
        session.signals.emit(
            SignalKind.INTERACTION_FAILURE,
            f"Step {outcome.step_index} ({outcome.action}) of flow '{flow.name}' failed: {outcome.error}",
            locator=outcome.selector,
            detail={
                "rule": "step-failed",
                "flow": flow.name,
                "step_index": outcome.step_index,
                "action": outcome.action,
                "error": outcome.error,
            },
        )

    def _emit_flow_failure(self, session, flow: Flow, result: TestResult) -> None:
        first = result.failed_steps[0]
        session.signals.emit(
            SignalKind.INTERACTION_FAILURE,
            f"User flow '{flow.name}' failed at step {first.step_index} ({first.action})",
            locator=first.selector,
            detail={
                "rule": "flow-failed",
                "flow": flow.name,
                "failed_step": first.step_index,
                "failed_steps": [o.step_index for o in result.failed_steps],
                "error": first.error,
            },
        )
