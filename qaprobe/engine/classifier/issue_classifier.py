"""
Issue Classifier - Maps Signals to severity, category and recommendation.

Classification is a total function: every SignalKind has a branch and
anything unmatched falls through to minor/General. It never raises.

When a Signal could satisfy two rules the more severe one wins, which is
why the 5xx branch is tested before the origin-probe branches.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

from ..contracts.issues import IssueRecord, Severity
from ..contracts.signals import Signal, SignalKind

logger = logging.getLogger("qaprobe.engine.classifier")


@dataclass(frozen=True)
class Verdict:
    """Outcome of the rule table for one Signal."""

    severity: Severity
    category: str
    recommendation: str


@dataclass(frozen=True)
class BatchTemplate:
    """Wording for a rule that is summarized into one IssueRecord."""

    issue: str
    """Format string with a `{count}` placeholder."""

    recommendation: str


# Rules whose per-element Signals are summarized with a count
BATCH_RULES: Dict[str, BatchTemplate] = {
    "broken-link": BatchTemplate(
        "{count} broken internal link(s) found",
        "Fix broken navigation links to improve user experience",
    ),
    "broken-image": BatchTemplate(
        "{count} broken image(s) detected",
        "Fix broken image sources and ensure all images load correctly",
    ),
    "missing-label": BatchTemplate(
        "{count} form input(s) missing labels",
        "Add labels to all form inputs for better accessibility",
    ),
    "missing-alt": BatchTemplate(
        "{count} image(s) missing alt text",
        "Add descriptive alt text to all images",
    ),
    "form-missing-submit": BatchTemplate(
        "{count} form(s) missing submit button",
        "Add submit buttons to all forms for proper user interaction",
    ),
    "small-text": BatchTemplate(
        "{count} element(s) with text below the minimum readable size",
        "Ensure text is at least 12px for readability",
    ),
    "zero-area-element": BatchTemplate(
        "{count} element(s) with text rendered at zero size",
        "Check for collapsed or clipped content at this viewport size",
    ),
}


class IssueClassifier:
    """
    Applies the fixed rule table.

    Usage:
        classifier = IssueClassifier()
        record = classifier.classify(signal)
        records = classifier.classify_all(session.signals.snapshot())
    """

    def classify(self, signal: Signal) -> IssueRecord:
        """Classify one Signal 1:1."""
        verdict = self.verdict(signal)
        details: Dict[str, Any] = dict(signal.detail)
        details["kind"] = _kind_value(signal)
        if signal.locator:
            details["locator"] = signal.locator
        return IssueRecord(
            severity=verdict.severity,
            category=verdict.category,
            issue=signal.message,
            recommendation=verdict.recommendation,
            details=details,
        )

    def classify_all(self, signals: Sequence[Signal]) -> List[IssueRecord]:
        """
        Classify a Signal sequence, summarizing batch rules.

        Signals of a batch rule are grouped by (rule, severity, category)
        into one IssueRecord placed where the group's first Signal was.
        Everything else maps 1:1 in collection order.
        """
        records: List[IssueRecord] = []
        groups: Dict[Tuple[str, Severity, str], IssueRecord] = {}

        for signal in signals:
            rule = signal.rule
            if rule not in BATCH_RULES:
                records.append(self.classify(signal))
                continue

            verdict = self.verdict(signal)
            key = (rule, verdict.severity, verdict.category)
            record = groups.get(key)
            if record is None:
                record = IssueRecord(
                    severity=verdict.severity,
                    category=verdict.category,
                    issue="",
                    recommendation=BATCH_RULES[rule].recommendation,
                    details={"rule": rule, "count": 0, "items": []},
                )
                groups[key] = record
                records.append(record)

            record.details["count"] += 1
            record.details["items"].append(_item(signal))
            record.issue = BATCH_RULES[rule].issue.format(count=record.details["count"])

        logger.debug(f"Classified {len(signals)} signals into {len(records)} issues")
        return records

    def verdict(self, signal: Signal) -> Verdict:
        """The rule table. Every branch returns; the last one is the default."""
        kind = signal.kind
        probe = signal.probe
        rule = signal.rule

        if probe == "connectivity":
            if signal.detail.get("cause") == "launch":
                return Verdict(
                    Severity.CRITICAL, "Connectivity",
                    "Install or repair the local browser (playwright install chromium); "
                    "the target URL was never contacted",
                )
            return Verdict(
                Severity.CRITICAL, "Connectivity",
                "Verify the application is running and reachable at the target URL",
            )

        if kind is SignalKind.SCRIPT_ERROR:
            return Verdict(
                Severity.CRITICAL, "JavaScript",
                "Fix JavaScript errors to ensure proper application functionality",
            )

        elif kind is SignalKind.HTTP_ERROR_STATUS:
            status = signal.detail.get("status")
            if status is not None and status >= 500:
                return Verdict(
                    Severity.CRITICAL, "Server",
                    "Check server logs and fix the failing endpoint",
                )
            if probe == "forms":
                return Verdict(
                    Severity.MAJOR, "Forms",
                    "Fix the form endpoint or request that returned an error status",
                )
            return Verdict(
                Severity.MAJOR, "Navigation",
                "Fix broken links and missing resources",
            )

        elif kind is SignalKind.NETWORK_FAILURE:
            if probe == "navigation":
                return Verdict(
                    Severity.MAJOR, "Navigation",
                    "Fix broken navigation links to improve user experience",
                )
            return Verdict(
                Severity.MAJOR, "Network",
                "Resolve network connectivity issues and API endpoint problems",
            )

        elif kind is SignalKind.SECURITY_WARNING:
            return Verdict(
                Severity.MAJOR, "Security",
                "Address security warnings to protect user data",
            )

        elif kind is SignalKind.ACCESSIBILITY_VIOLATION:
            if rule == "missing-title":
                return Verdict(
                    Severity.MINOR, "SEO",
                    "Add a descriptive page title for better SEO and user experience",
                )
            if rule == "form-missing-submit":
                return Verdict(
                    Severity.MAJOR, "Forms",
                    "Add submit buttons to all forms for proper user interaction",
                )
            if rule == "missing-label" or signal.detail.get("interactive"):
                return Verdict(
                    Severity.MAJOR, "Accessibility",
                    "Give every interactive control an accessible name",
                )
            return Verdict(
                Severity.MINOR, "Accessibility",
                "Improve readability and alternative text for passive content",
            )

        elif kind is SignalKind.LAYOUT_VIOLATION:
            if rule == "horizontal-overflow":
                return Verdict(
                    Severity.MAJOR, "Responsive Design",
                    "Ensure content fits within viewport width on all device sizes",
                )
            if rule == "zero-area-element":
                return Verdict(
                    Severity.MINOR, "Responsive Design",
                    "Check for collapsed or clipped content at this viewport size",
                )
            if rule == "broken-image":
                return Verdict(
                    Severity.MAJOR, "Content",
                    "Fix broken image sources and ensure all images load correctly",
                )

        elif kind is SignalKind.INTERACTION_FAILURE:
            if rule == "flow-failed":
                return Verdict(
                    Severity.MAJOR, "User Flow",
                    "Review and fix the failing user flow steps",
                )
            return Verdict(
                Severity.MINOR, "User Flow",
                "Check the selector, value and timeout of the failing step",
            )

        elif kind is SignalKind.PERFORMANCE_METRIC:
            if rule == "load-time":
                return Verdict(
                    Severity.MAJOR, "Performance",
                    "Optimize images, minify CSS/JS, and reduce server response time",
                )
            return Verdict(
                Severity.MINOR, "Performance",
                "Review JavaScript memory usage and look for memory leaks",
            )

        return Verdict(Severity.MINOR, "General", "Review this finding")


def _kind_value(signal: Signal) -> str:
    kind = signal.kind
    return kind.value if isinstance(kind, SignalKind) else str(kind)


def _item(signal: Signal) -> Dict[str, Any]:
    item = {k: v for k, v in signal.detail.items() if k not in ("rule", "probe")}
    item["message"] = signal.message
    if signal.locator:
        item["locator"] = signal.locator
    return item
