"""
qaprobe - Browser-driven probing and diagnosis engine for local web apps.
"""

__version__ = "1.0.0"
