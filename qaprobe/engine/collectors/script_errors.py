"""
Script-error collector.

Subscribes to uncaught page exceptions and console error output. Every
occurrence becomes its own Signal: a repeated identical error is itself
diagnostic (render loops, polling failures), so nothing is deduplicated.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from ..contracts.signals import SignalKind

logger = logging.getLogger("qaprobe.engine.collectors.script_errors")


class ScriptErrorCollector:
    """Converts `pageerror` and console `error` events into Signals."""

    name = "script_errors"

    def __init__(self, capture_errors: bool = True, keep_warnings: bool = True):
        self.capture_errors = capture_errors
        self.keep_warnings = keep_warnings
        self.console_messages: List[Dict[str, Any]] = []
        self._store = None

    def attach(self, session) -> None:
        self._store = session.signals
        if self.capture_errors:
            session.listeners.add(session.page, "pageerror", self._on_page_error)
        session.listeners.add(session.page, "console", self._on_console)

    def _on_page_error(self, error) -> None:
        message = getattr(error, "message", None) or str(error)
        detail = {"source": "pageerror"}
        name = getattr(error, "name", None)
        if name:
            detail["error_name"] = name
        stack = getattr(error, "stack", None)
        if stack:
            detail["stack"] = stack
        self._store.emit(SignalKind.SCRIPT_ERROR, message, detail=detail)

    def _on_console(self, msg) -> None:
        msg_type = msg.type
        if msg_type == "error" and self.capture_errors:
            location = _location_of(msg)
            self._record(msg_type, msg.text, location)
            self._store.emit(
                SignalKind.SCRIPT_ERROR,
                msg.text,
                locator=location.get("url") or None,
                detail={"source": "console", "location": location},
            )
        elif msg_type == "warning" and self.keep_warnings:
            self._record(msg_type, msg.text, _location_of(msg))

    def _record(self, msg_type: str, text: str, location: Dict[str, Any]) -> None:
        self.console_messages.append({
            "type": msg_type,
            "text": text,
            "location": location,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })


def _location_of(msg) -> Dict[str, Any]:
    location = getattr(msg, "location", None)
    return dict(location) if location else {}
