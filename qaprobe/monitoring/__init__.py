"""
Monitoring Module - structured logging for probe runs.

Usage:
    from qaprobe.monitoring import probe_logger

    probe_logger.log_run_start(run_id, url, "comprehensive")
    probe_logger.log_probe(run_id, "navigation", passed=False, duration_ms=812.4)
"""

from qaprobe.monitoring.logger import ProbeLogger, probe_logger

__all__ = [
    "ProbeLogger",
    "probe_logger",
]
