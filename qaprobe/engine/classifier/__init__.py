"""
Classifier - Signal to IssueRecord rule table.
"""

from .issue_classifier import BATCH_RULES, IssueClassifier, Verdict

__all__ = ["BATCH_RULES", "IssueClassifier", "Verdict"]
