"""
Orchestrator Contracts - Suite modes and their probe plans.
"""

from enum import Enum
from typing import Dict, Tuple


class SuiteMode(Enum):
    """Which bundle of probes a run executes."""

    BASIC = "basic"
    AUTH = "auth"
    """Declared but not implemented: yields one passing placeholder result."""

    FORMS = "forms"
    NAVIGATION = "navigation"
    RESPONSIVE = "responsive"
    COMPREHENSIVE = "comprehensive"

    @classmethod
    def from_string(cls, value: str) -> "SuiteMode":
        """Convert string to SuiteMode. Raises ValueError when unknown."""
        return cls(value.lower())

    @property
    def plan(self) -> Tuple[str, ...]:
        """Probe names in execution order. Custom flows always run after."""
        return SUITE_PLANS[self]


# Order matters: navigation and responsive mutate the page and restore it
# before the next probe assumes the original location.
SUITE_PLANS: Dict[SuiteMode, Tuple[str, ...]] = {
    SuiteMode.BASIC: ("basic",),
    SuiteMode.AUTH: (),
    SuiteMode.FORMS: ("forms",),
    SuiteMode.NAVIGATION: ("navigation",),
    SuiteMode.RESPONSIVE: ("responsive",),
    SuiteMode.COMPREHENSIVE: (
        "basic",
        "navigation",
        "forms",
        "responsive",
        "ui_quality",
        "performance",
    ),
}
