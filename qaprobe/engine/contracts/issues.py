"""
Issue Contracts - Classified form of Signals.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class Severity(Enum):
    """Normalized severity scale used across every collector and probe."""

    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"


@dataclass
class IssueRecord:
    """
    A Signal after severity/category classification.

    Batch summaries carry `details["count"]` and `details["items"]`,
    one item per contributing Signal.
    """

    severity: Severity
    category: str
    issue: str
    recommendation: str
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def count(self) -> int:
        """Number of Signals this record stands for."""
        return self.details.get("count", 1)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary for JSON output."""
        return {
            "severity": self.severity.value,
            "category": self.category,
            "issue": self.issue,
            "recommendation": self.recommendation,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"IssueRecord({self.severity.value}/{self.category}: {self.issue})"
