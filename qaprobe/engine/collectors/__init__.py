"""
Collectors - Passive listeners that turn browser events into Signals.

All collectors are suite-agnostic and write into the session's SignalStore.

Usage:
    collectors = build_collectors(FilterFlags(security=False))
    for collector in collectors:
        collector.attach(session)
"""

from typing import List

from ..contracts.signals import FilterFlags
from .signal_store import SignalStore
from .script_errors import ScriptErrorCollector
from .network import NetworkCollector
from .security import SecurityCollector


def build_collectors(filters: FilterFlags) -> List[object]:
    """Instantiate the collectors enabled by `filters`, in attach order."""
    collectors: List[object] = []
    if filters.errors or filters.warnings:
        collectors.append(
            ScriptErrorCollector(capture_errors=filters.errors, keep_warnings=filters.warnings)
        )
    if filters.network:
        collectors.append(NetworkCollector())
    if filters.security:
        collectors.append(SecurityCollector())
    return collectors


__all__ = [
    "SignalStore",
    "ScriptErrorCollector",
    "NetworkCollector",
    "SecurityCollector",
    "build_collectors",
]
