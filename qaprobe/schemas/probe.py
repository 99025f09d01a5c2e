"""
Pydantic schemas for the probe API.

These schemas define the REST contract used in qaprobe/routers/probe.py
and convert request bodies into engine contracts.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from qaprobe.engine.contracts import FilterFlags, Flow, FlowStep, StepAction, Viewport
from qaprobe.engine.orchestrator import SuiteMode


# ============== ENUMS ==============

class SuiteModeEnum(str, Enum):
    """Suite selected by POST /probe/suite."""
    basic = "basic"
    auth = "auth"
    forms = "forms"
    navigation = "navigation"
    responsive = "responsive"
    comprehensive = "comprehensive"


class FlowActionEnum(str, Enum):
    """Actions available to custom flow steps."""
    goto = "goto"
    click = "click"
    type = "type"
    wait = "wait"
    screenshot = "screenshot"
    verify = "verify"


class InteractionActionEnum(str, Enum):
    """Actions available to monitor interactions."""
    click = "click"
    type = "type"
    navigate = "navigate"
    wait = "wait"


# ============== SHARED ==============

class ViewportSchema(BaseModel):
    """Browser viewport size."""
    width: int = Field(1280, ge=1, le=7680)
    height: int = Field(720, ge=1, le=4320)

    def to_viewport(self) -> Viewport:
        return Viewport(width=self.width, height=self.height)


# ============== RUN SUITE ==============

class FlowStepSchema(BaseModel):
    """One step of a custom user flow."""
    action: FlowActionEnum
    selector: Optional[str] = Field(None, description="CSS selector (click, type, verify)")
    value: Optional[str] = Field(None, description="URL for goto, text for type")
    expected: Optional[str] = Field(None, description="Substring expected by verify")
    timeout: int = Field(5000, ge=0, description="Step timeout in milliseconds")

    def to_step(self) -> FlowStep:
        return FlowStep(
            action=StepAction.from_string(self.action.value),
            selector=self.selector,
            value=self.value,
            expected=self.expected,
            timeout_ms=self.timeout,
        )


class UserFlowSchema(BaseModel):
    """A named custom flow."""
    name: str = Field(..., min_length=1, max_length=200)
    steps: List[FlowStepSchema] = Field(default=[])

    def to_flow(self) -> Flow:
        return Flow(name=self.name, steps=[s.to_step() for s in self.steps])


class SuiteRequest(BaseModel):
    """Request body for POST /probe/suite."""
    url: str = Field(..., min_length=1, description="URL of the running application")
    test_suite: SuiteModeEnum = Field(SuiteModeEnum.comprehensive)
    user_flows: List[UserFlowSchema] = Field(default=[])
    viewport: ViewportSchema = Field(default_factory=ViewportSchema)

    class Config:
        json_schema_extra = {
            "example": {
                "url": "http://localhost:3000",
                "test_suite": "comprehensive",
                "user_flows": [
                    {
                        "name": "login",
                        "steps": [
                            {"action": "goto", "value": "/login"},
                            {"action": "type", "selector": "#email", "value": "a@b.c"},
                            {"action": "click", "selector": "button[type=submit]"},
                            {"action": "verify", "selector": "h1", "expected": "Welcome"},
                        ],
                    }
                ],
                "viewport": {"width": 1280, "height": 720},
            }
        }

    @property
    def mode(self) -> SuiteMode:
        return SuiteMode.from_string(self.test_suite.value)

    @property
    def flows(self) -> List[Flow]:
        return [f.to_flow() for f in self.user_flows]


# ============== MONITOR ==============

class FilterSchema(BaseModel):
    """Capture-time collector switches."""
    errors: bool = True
    warnings: bool = True
    network: bool = True
    performance: bool = False
    security: bool = True

    def to_flags(self) -> FilterFlags:
        return FilterFlags(
            errors=self.errors,
            warnings=self.warnings,
            network=self.network,
            performance=self.performance,
            security=self.security,
        )


class InteractionSchema(BaseModel):
    """One interaction performed during monitoring."""
    action: InteractionActionEnum
    selector: Optional[str] = None
    value: Optional[str] = None
    timeout: int = Field(5000, ge=0)

    def to_step(self) -> FlowStep:
        return FlowStep(
            action=StepAction.from_string(self.action.value),
            selector=self.selector,
            value=self.value,
            timeout_ms=self.timeout,
        )


class MonitorRequest(BaseModel):
    """Request body for POST /probe/monitor."""
    url: str = Field(..., min_length=1)
    duration: int = Field(30000, ge=0, le=600000, description="Wall-clock duration in milliseconds")
    filters: FilterSchema = Field(default_factory=FilterSchema)
    interactions: List[InteractionSchema] = Field(default=[])

    class Config:
        json_schema_extra = {
            "example": {
                "url": "http://localhost:3000",
                "duration": 10000,
                "filters": {"performance": True},
                "interactions": [{"action": "click", "selector": "#load-more"}],
            }
        }


# ============== ERRORS ==============

class ProbeErrorResponse(BaseModel):
    """Envelope returned when an invocation faults."""
    error: str
    partial_results: int
    partial_signals: int
    results: List[Dict[str, Any]] = Field(default=[])
