"""
Flow Contracts - Scripted interaction sequences.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class StepAction(Enum):
    """Actions a flow step can perform."""

    NAVIGATE = "goto"
    CLICK = "click"
    TYPE = "type"
    WAIT = "wait"
    SCREENSHOT = "screenshot"
    VERIFY = "verify"

    @classmethod
    def from_string(cls, value: str) -> "StepAction":
        """Accept both 'goto' and 'navigate' for navigation."""
        value = value.lower()
        if value == "navigate":
            return cls.NAVIGATE
        return cls(value)

    @property
    def needs_selector(self) -> bool:
        return self in (StepAction.CLICK, StepAction.TYPE, StepAction.VERIFY)


@dataclass
class FlowStep:
    """One step of a scripted flow."""

    action: StepAction
    selector: Optional[str] = None
    value: Optional[str] = None
    expected: Optional[str] = None
    timeout_ms: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FlowStep":
        return cls(
            action=StepAction.from_string(data["action"]),
            selector=data.get("selector"),
            value=data.get("value"),
            expected=data.get("expected"),
            timeout_ms=data.get("timeout", data.get("timeout_ms")),
        )


@dataclass
class Flow:
    """A named, ordered sequence of steps."""

    name: str
    steps: List[FlowStep] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Flow":
        return cls(
            name=data["name"],
            steps=[FlowStep.from_dict(s) for s in data.get("steps", [])],
        )
