"""
Probe Logger - Structured logging for probe runs.

Each event is a single JSON document so runs can be traced end to end:
- Run start (target URL, suite mode)
- Probe completion (name, pass/fail, duration)
- Session errors (initial navigation failures)
- Run completion (counts by severity)
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Configure the engine logger
logger = logging.getLogger("qaprobe")
logger.setLevel(logging.INFO)

if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


class ProbeLogger:
    """
    Structured logger for probe runs.

    Usage:
        probe_logger.log_run_start("ab12cd34", "http://localhost:3000", "basic")
        ...
        probe_logger.log_run_complete("ab12cd34", summary.to_dict())
    """

    def __init__(self):
        self._logger = logger

    def log_run_start(
        self,
        run_id: str,
        url: str,
        mode: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log the start of a suite or monitor run."""
        log_data = {
            "event": "run_start",
            "run_id": run_id,
            "url": url,
            "mode": mode,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if metadata:
            log_data["metadata"] = metadata

        self._logger.info(f"Run Start: {json.dumps(log_data)}")

    def log_probe(
        self,
        run_id: str,
        probe: str,
        passed: bool,
        duration_ms: float = 0.0,
        error: Optional[str] = None,
    ) -> None:
        """Log completion of a single probe."""
        log_data = {
            "event": "probe_complete",
            "run_id": run_id,
            "probe": probe,
            "passed": passed,
            "duration_ms": round(duration_ms, 2),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if error:
            log_data["error"] = error

        level = logging.INFO if passed else logging.WARNING
        self._logger.log(level, f"Probe Complete: {json.dumps(log_data)}")

    def log_session_error(
        self,
        run_id: str,
        url: str,
        error: str,
        status: Optional[int] = None,
    ) -> None:
        """Log a failed initial navigation."""
        log_data = {
            "event": "session_error",
            "run_id": run_id,
            "url": url,
            "status": status,
            "error": error,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        self._logger.error(f"Session Error: {json.dumps(log_data)}")

    def log_run_complete(
        self,
        run_id: str,
        summary: Dict[str, Any],
        duration_ms: float = 0.0,
    ) -> None:
        """Log the aggregated outcome of a run."""
        log_data = {
            "event": "run_complete",
            "run_id": run_id,
            "total_tests": summary.get("total_tests", 0),
            "passed": summary.get("passed", 0),
            "failed": summary.get("failed", 0),
            "severity_counts": summary.get("severity_counts", {}),
            "duration_ms": round(duration_ms, 2),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        self._logger.info(f"Run Complete: {json.dumps(log_data)}")


# Global instance
probe_logger = ProbeLogger()
