"""
Session - Lifetime management for the one live page of an invocation.
"""

from .launcher import BrowserHandle, PlaywrightLauncher
from .listeners import ListenerRegistry
from .session_manager import ProbeSession, SessionManager

__all__ = [
    "BrowserHandle",
    "PlaywrightLauncher",
    "ListenerRegistry",
    "ProbeSession",
    "SessionManager",
]
