"""
Signal Store - Session-owned, append-only sequence of Signals.

Collectors fire from Playwright event callbacks while probes run, so
appends can interleave with any probe. Everything runs on one event loop
and `list.append` is atomic, so no lock is taken. Within one collector the
order of appends is the order of events.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..contracts.signals import Signal, SignalKind

logger = logging.getLogger("qaprobe.engine.collectors")


class SignalStore:
    """
    Shared sink for every collector and probe of one session.

    Usage:
        store = SignalStore()
        with store.phase("forms"):
            store.emit(SignalKind.ACCESSIBILITY_VIOLATION, "Input missing label",
                       locator="input[2]", detail={"rule": "missing-label"})
        signals = store.snapshot()
    """

    DEFAULT_PHASE = "session"

    def __init__(self):
        self._signals: List[Signal] = []
        self._phase = self.DEFAULT_PHASE
        self._navigation_owned = 0

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def emit(
        self,
        kind: SignalKind,
        message: str,
        locator: Optional[str] = None,
        detail: Optional[Dict[str, Any]] = None,
    ) -> Signal:
        """Create a Signal tagged with the current phase and append it."""
        payload = dict(detail or {})
        payload.setdefault("probe", self._phase)
        signal = Signal(kind=kind, message=message, locator=locator, detail=payload)
        self.add(signal)
        return signal

    def add(self, signal: Signal) -> None:
        self._signals.append(signal)
        logger.debug(f"Signal captured: {signal!r}")

    # ------------------------------------------------------------------
    # Context
    # ------------------------------------------------------------------

    @property
    def current_phase(self) -> str:
        return self._phase

    @contextmanager
    def phase(self, name: str) -> Iterator[None]:
        """Attribute every Signal emitted inside the block to probe `name`."""
        previous = self._phase
        self._phase = name
        try:
            yield
        finally:
            self._phase = previous

    @property
    def navigation_owned(self) -> bool:
        return self._navigation_owned > 0

    @contextmanager
    def owned_navigation(self) -> Iterator[None]:
        """
        Main-frame navigations inside the block are reported by the caller.

        The network collector skips navigation requests while this is held.
        """
        self._navigation_owned += 1
        try:
            yield
        finally:
            self._navigation_owned -= 1

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def snapshot(self) -> Tuple[Signal, ...]:
        """Immutable copy of everything captured so far."""
        return tuple(self._signals)

    def of_kind(self, kind: SignalKind) -> List[Signal]:
        return [s for s in self._signals if s.kind == kind]

    def __len__(self) -> int:
        return len(self._signals)

    def __iter__(self):
        return iter(tuple(self._signals))
