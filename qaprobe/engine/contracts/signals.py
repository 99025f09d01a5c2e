"""
Signal Contracts - Atomic, uninterpreted observations.

A Signal is produced by exactly one collector or probe and is never
mutated afterwards. Severity is decided later by the IssueClassifier.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


class SignalKind(Enum):
    """Closed set of observation kinds."""

    SCRIPT_ERROR = "script-error"
    """Uncaught exception or console error-level output."""

    NETWORK_FAILURE = "network-failure"
    """Request that never got a response (DNS, refused, aborted)."""

    HTTP_ERROR_STATUS = "http-error-status"
    """Response delivered with status >= 400."""

    SECURITY_WARNING = "security-warning"
    """Console text matching a security keyword."""

    ACCESSIBILITY_VIOLATION = "accessibility-violation"
    """DOM finding that hurts assistive technology or readability."""

    LAYOUT_VIOLATION = "layout-violation"
    """DOM finding about rendering: overflow, zero-area, broken images."""

    INTERACTION_FAILURE = "interaction-failure"
    """Scripted flow step or flow that did not complete."""

    PERFORMANCE_METRIC = "performance-metric"
    """Timing or memory figure over its budget."""


@dataclass(frozen=True)
class Signal:
    """
    One atomic observation.

    `detail` is wrapped in a read-only mapping on creation so that
    downstream consumers cannot mutate it.
    """

    kind: SignalKind
    message: str
    locator: Optional[str] = None
    detail: Mapping[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if not isinstance(self.detail, MappingProxyType):
            object.__setattr__(self, "detail", MappingProxyType(dict(self.detail)))

    @property
    def probe(self) -> str:
        """Name of the probe phase that was running when this was captured."""
        return self.detail.get("probe", "session")

    @property
    def rule(self) -> Optional[str]:
        """Sub-condition identifier set by DOM probes and runners."""
        return self.detail.get("rule")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary for JSON output."""
        kind = self.kind.value if isinstance(self.kind, SignalKind) else str(self.kind)
        return {
            "kind": kind,
            "message": self.message,
            "locator": self.locator,
            "detail": dict(self.detail),
            "timestamp": self.timestamp.isoformat(),
        }

    def __repr__(self) -> str:
        kind = self.kind.value if isinstance(self.kind, SignalKind) else self.kind
        return f"Signal({kind}, {self.message[:40]!r})"


@dataclass(frozen=True)
class Viewport:
    """Browser viewport size."""

    width: int = 1280
    height: int = 720

    def to_dict(self) -> Dict[str, int]:
        """Playwright-compatible viewport dict."""
        return {"width": self.width, "height": self.height}

    def describe(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class FilterFlags:
    """Capture-time switches for the signal collectors."""

    errors: bool = True
    warnings: bool = True
    network: bool = True
    performance: bool = False
    security: bool = True
