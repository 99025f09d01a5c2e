"""
Forms probe: submit controls and label association.
"""

import logging
from typing import List

from ..contracts.results import TestResult
from ..contracts.signals import SignalKind
from .base import Probe
from .evaluators import JSEvaluators

logger = logging.getLogger("qaprobe.engine.probes.forms")


class FormsProbe(Probe):
    """
    Two independent checks over the current page.

    - Form Structure Check: every form has a submit-capable control
    - Form Label Check: every control has a label or accessible name
    """

    name = "forms"
    result_names = ("Form Structure Check", "Form Label Check")

    async def run(self, session) -> List[TestResult]:
        return [
            await self._check_structure(session),
            await self._check_labels(session),
        ]

    async def _check_structure(self, session) -> TestResult:
        try:
            forms = await session.page.evaluate(JSEvaluators.FORM_STRUCTURE)
        except Exception as e:
            return self.failed("Form Structure Check", e)

        missing = [form for form in forms if not form.get("hasSubmitButton")]
        for form in missing:
            self.emit(
                session,
                SignalKind.ACCESSIBILITY_VIOLATION,
                "form-missing-submit",
                f"Form {form['element']} has no submit control",
                locator=form["element"],
                interactive=True,
                action=form.get("action"),
                method=form.get("method"),
            )
        return TestResult(
            name="Form Structure Check",
            passed=not missing,
            details={
                "forms_found": len(forms),
                "forms_missing_submit": len(missing),
                "forms": forms,
            },
        )

    async def _check_labels(self, session) -> TestResult:
        try:
            unlabeled = await session.page.evaluate(JSEvaluators.MISSING_LABELS)
        except Exception as e:
            return self.failed("Form Label Check", e)

        for control in unlabeled:
            self.emit(
                session,
                SignalKind.ACCESSIBILITY_VIOLATION,
                "missing-label",
                f"Form control {control['element']} is missing a label",
                locator=control["element"],
                interactive=True,
                type=control.get("type"),
            )
        return TestResult(
            name="Form Label Check",
            passed=not unlabeled,
            details={"unlabeled_count": len(unlabeled), "controls": unlabeled},
        )
