"""
Network collector.

Two sources:
- `requestfailed`: the request never got a response (DNS, refused, aborted)
- `response` with status >= 400: transport worked, server said no

Severity is not decided here; the status travels in `detail["status"]` so
the classifier can rank 5xx above 4xx.
"""

import logging

from ..contracts.signals import SignalKind

logger = logging.getLogger("qaprobe.engine.collectors.network")


class NetworkCollector:
    """Converts failed requests and error responses into Signals."""

    name = "network"

    def __init__(self):
        self._store = None

    def attach(self, session) -> None:
        self._store = session.signals
        session.listeners.add(session.page, "requestfailed", self._on_request_failed)
        session.listeners.add(session.page, "response", self._on_response)

    def _owned(self, request) -> bool:
        """Navigations claimed by a probe are reported by that probe."""
        if not self._store.navigation_owned or request is None:
            return False
        return bool(request.is_navigation_request())

    def _on_request_failed(self, request) -> None:
        if self._owned(request):
            return
        failure = request.failure or "Unknown error"
        self._store.emit(
            SignalKind.NETWORK_FAILURE,
            f"{request.method} {request.url} failed: {failure}",
            locator=request.url,
            detail={"method": request.method, "failure": failure},
        )

    def _on_response(self, response) -> None:
        status = response.status
        if status < 400:
            return
        request = getattr(response, "request", None)
        if self._owned(request):
            return
        self._store.emit(
            SignalKind.HTTP_ERROR_STATUS,
            f"HTTP {status} for {response.url}",
            locator=response.url,
            detail={
                "status": status,
                "status_text": response.status_text,
                "method": request.method if request is not None else None,
            },
        )
