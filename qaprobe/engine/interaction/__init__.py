"""
Interaction - Scripted flow execution.
"""

from .runner import InteractionRunner

__all__ = ["InteractionRunner"]
