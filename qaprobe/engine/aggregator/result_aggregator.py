"""
Result Aggregator - Folds TestResults and IssueRecords into a QASummary.

Recommendation order is fixed:
1. One banner per severity present (critical, then major, then minor)
2. One "Focus on <category>" line per category, in first-seen order
3. A confirmation line only when the run produced no issues at all
"""

import logging
from typing import Dict, List, Sequence

from ..contracts.issues import IssueRecord, Severity
from ..contracts.results import QASummary, TestResult

logger = logging.getLogger("qaprobe.engine.aggregator")

SEVERITY_BANNERS = {
    Severity.CRITICAL: "CRITICAL: Address critical issues immediately - these prevent basic functionality",
    Severity.MAJOR: "MAJOR: Fix major issues that significantly impact user experience",
    Severity.MINOR: "MINOR: Consider addressing minor issues for better overall quality",
}

NO_ISSUES_MESSAGE = "No issues detected. Application appears to be well-built and functional."


class ResultAggregator:
    """
    Builds the terminal QASummary.

    Usage:
        aggregator = ResultAggregator()
        summary = aggregator.aggregate(results, issues)
        print(summary.describe())
    """

    def aggregate(
        self,
        results: Sequence[TestResult],
        issues: Sequence[IssueRecord],
    ) -> QASummary:
        passed = sum(1 for r in results if r.passed)

        severity_counts: Dict[str, int] = {s.value: 0 for s in Severity}
        category_counts: Dict[str, int] = {}
        for record in issues:
            severity_counts[record.severity.value] += 1
            category_counts[record.category] = category_counts.get(record.category, 0) + 1

        summary = QASummary(
            total_tests=len(results),
            passed=passed,
            failed=len(results) - passed,
            issues=list(issues),
            severity_counts=severity_counts,
            category_counts=category_counts,
            recommendations=self.recommend(severity_counts, category_counts),
            results=list(results),
        )
        logger.debug(
            f"Aggregated {summary.total_tests} results and {summary.total_issues} issues"
        )
        return summary

    def recommend(
        self,
        severity_counts: Dict[str, int],
        category_counts: Dict[str, int],
    ) -> List[str]:
        """Deterministic, deduplicated recommendation lines."""
        recommendations: List[str] = []

        for severity in Severity:
            if severity_counts.get(severity.value, 0) > 0:
                recommendations.append(SEVERITY_BANNERS[severity])

        for category, count in category_counts.items():
            recommendations.append(f"Focus on {category}: {count} issue(s) found")

        if sum(severity_counts.values()) == 0:
            recommendations.append(NO_ISSUES_MESSAGE)

        # dict.fromkeys keeps first-seen order
        return list(dict.fromkeys(recommendations))
