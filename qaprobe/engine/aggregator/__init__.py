"""
Aggregator - QASummary construction.
"""

from .result_aggregator import NO_ISSUES_MESSAGE, SEVERITY_BANNERS, ResultAggregator

__all__ = ["NO_ISSUES_MESSAGE", "SEVERITY_BANNERS", "ResultAggregator"]
