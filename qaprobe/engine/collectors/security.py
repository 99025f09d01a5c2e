"""
Security collector.

Keyword match over console text. False positives are acceptable: the
classifier never ranks a security warning above major on its own.
"""

import logging
from typing import Tuple

from ..contracts.signals import SignalKind

logger = logging.getLogger("qaprobe.engine.collectors.security")


class SecurityCollector:
    """Flags console lines mentioning mixed content, CORS, CSP and similar."""

    name = "security"

    KEYWORDS: Tuple[str, ...] = ("mixed content", "insecure", "cors", "csp", "xss")

    def __init__(self):
        self._store = None

    def attach(self, session) -> None:
        self._store = session.signals
        session.listeners.add(session.page, "console", self._on_console)

    def matches(self, text: str) -> Tuple[str, ...]:
        lowered = text.lower()
        return tuple(k for k in self.KEYWORDS if k in lowered)

    def _on_console(self, msg) -> None:
        text = msg.text
        hits = self.matches(text)
        if not hits:
            return
        self._store.emit(
            SignalKind.SECURITY_WARNING,
            text,
            detail={"keywords": list(hits), "console_type": msg.type},
        )
