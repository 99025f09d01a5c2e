"""
Monitor - Passive, time-boxed Signal capture.
"""

from .signal_monitor import MONITORED_FLOW, MonitorReport, SignalMonitor

__all__ = ["MONITORED_FLOW", "MonitorReport", "SignalMonitor"]
