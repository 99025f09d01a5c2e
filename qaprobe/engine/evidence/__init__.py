"""
Evidence - Screenshot collaborator used by flow evidence steps.
"""

from .screenshot_exporter import ScreenshotExporter

__all__ = ["ScreenshotExporter"]
