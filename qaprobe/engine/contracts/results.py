"""
Result Contracts - Outcomes of checks and flows, and the run aggregate.

1. StepOutcome: one scripted step inside a flow
2. TestResult: one named check or flow
3. QASummary: counts, issues and recommendations for one invocation
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .issues import IssueRecord


@dataclass
class StepOutcome:
    """Outcome of a single scripted step."""

    step_index: int
    """1-based position within the flow."""

    action: str
    passed: bool = False
    selector: Optional[str] = None
    value: Optional[str] = None

    actual_value: Optional[str] = None
    """Live text content read by a verify step (None when element missing)."""

    expected_value: Optional[str] = None
    error: Optional[str] = None

    skipped: bool = False
    """Set for steps after a failed navigate."""

    evidence: Optional[str] = None
    """Path returned by the screenshot collaborator."""

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "step_index": self.step_index,
            "action": self.action,
            "passed": self.passed,
            "selector": self.selector,
            "value": self.value,
            "error": self.error,
        }
        if self.action == "verify":
            data["actual_value"] = self.actual_value
            data["expected_value"] = self.expected_value
        if self.skipped:
            data["skipped"] = True
        if self.evidence:
            data["evidence"] = self.evidence
        return data


@dataclass
class TestResult:
    """Outcome of one named check or flow."""

    __test__ = False  # not a pytest test class

    name: str
    passed: bool
    details: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    steps: List[StepOutcome] = field(default_factory=list)

    @property
    def failed_steps(self) -> List[StepOutcome]:
        return [s for s in self.steps if not s.passed and not s.skipped]

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "name": self.name,
            "passed": self.passed,
            "details": self.details,
            "error": self.error,
        }
        if self.steps:
            data["steps"] = [s.to_dict() for s in self.steps]
        return data

    def __repr__(self) -> str:
        return f"TestResult({self.name}, {'PASSED' if self.passed else 'FAILED'})"


@dataclass
class QASummary:
    """
    Terminal aggregate for one invocation.

    `issues` keeps collection order; severity ordering is left to renderers.
    """

    total_tests: int = 0
    passed: int = 0
    failed: int = 0
    issues: List[IssueRecord] = field(default_factory=list)
    severity_counts: Dict[str, int] = field(
        default_factory=lambda: {"critical": 0, "major": 0, "minor": 0}
    )
    category_counts: Dict[str, int] = field(default_factory=dict)
    recommendations: List[str] = field(default_factory=list)
    results: List[TestResult] = field(default_factory=list)

    @property
    def total_issues(self) -> int:
        return len(self.issues)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary for the reporting sink."""
        return {
            "total_tests": self.total_tests,
            "passed": self.passed,
            "failed": self.failed,
            "total_issues": self.total_issues,
            "severity_counts": dict(self.severity_counts),
            "category_counts": dict(self.category_counts),
            "issues": [i.to_dict() for i in self.issues],
            "recommendations": list(self.recommendations),
            "results": [r.to_dict() for r in self.results],
        }

    def describe(self) -> str:
        """Generate human-readable summary."""
        lines = [
            f"QASummary: {self.passed}/{self.total_tests} checks passed",
            f"  Issues: {self.total_issues} "
            f"(critical={self.severity_counts.get('critical', 0)}, "
            f"major={self.severity_counts.get('major', 0)}, "
            f"minor={self.severity_counts.get('minor', 0)})",
        ]
        for rec in self.recommendations:
            lines.append(f"  - {rec}")
        return "\n".join(lines)
