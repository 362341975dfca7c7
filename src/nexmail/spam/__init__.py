# =============================================================================
# Spam Module
# =============================================================================
# Client-side content analysis using fixed heuristics.
#
#   - evaluate(): spam score (0-100), reasons and a spam verdict
#   - summarize(): short extractive summary of the body
#   - categorize(): inbox / spam / promotion / social / updates
#
# Everything here is a pure function of the email's text. There is no
# training and no model file: the rules and lexicons are fixed, so the same
# email always gets the same verdict.
# =============================================================================

from nexmail.spam.categorizer import categorize
from nexmail.spam.classifier import (
    SPAM_THRESHOLD,
    ClassificationResult,
    Signal,
    SpamClassifier,
    evaluate,
)
from nexmail.spam.summarizer import summarize

__all__ = [
    "SPAM_THRESHOLD",
    "ClassificationResult",
    "Signal",
    "SpamClassifier",
    "categorize",
    "evaluate",
    "summarize",
]
