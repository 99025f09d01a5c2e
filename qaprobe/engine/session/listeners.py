"""
Listener Registry - Session-scoped record of page event subscriptions.

Collectors never subscribe process-wide; every handler goes through the
registry of the session that owns the page so teardown can detach exactly
what was attached.
"""

import logging
from typing import Any, Callable, List, Tuple

logger = logging.getLogger("qaprobe.engine.session.listeners")


class ListenerRegistry:
    """Tracks (emitter, event, handler) triples for later detachment."""

    def __init__(self):
        self._entries: List[Tuple[Any, str, Callable]] = []

    def add(self, emitter: Any, event: str, handler: Callable) -> None:
        emitter.on(event, handler)
        self._entries.append((emitter, event, handler))

    def detach_all(self) -> int:
        """Remove every registered handler. Returns how many were removed."""
        removed = 0
        while self._entries:
            emitter, event, handler = self._entries.pop()
            try:
                emitter.remove_listener(event, handler)
                removed += 1
            except Exception as e:
                logger.warning(f"Failed to detach '{event}' listener: {e}")
        return removed

    @property
    def events(self) -> List[str]:
        return [event for _, event, _ in self._entries]

    def __len__(self) -> int:
        return len(self._entries)
