"""
DOM Probes - On-demand query-and-judge checks against the live page.

Each probe runs inside its own SignalStore phase and emits one Signal per
offending element. Batch summarization is the classifier's job.
"""

from .base import Probe
from .basic import BasicProbe
from .evaluators import JSEvaluators
from .forms import FormsProbe
from .navigation import NavigationProbe
from .performance import PerformanceProbe, sample_metrics
from .responsive import ResponsiveProbe
from .ui_quality import UIQualityProbe

__all__ = [
    "Probe",
    "BasicProbe",
    "JSEvaluators",
    "FormsProbe",
    "NavigationProbe",
    "PerformanceProbe",
    "sample_metrics",
    "ResponsiveProbe",
    "UIQualityProbe",
]
