# =============================================================================
# Extractive Summarizer
# =============================================================================
# Builds the short preview shown next to each email: the first few
# reasonably long sentences of the body, verbatim.
# =============================================================================

from typing import TYPE_CHECKING

from nexmail.spam.lexicon import SENTENCE_SPLIT_PATTERN

if TYPE_CHECKING:
    from nexmail.core import EmailContent


MIN_SENTENCE_LENGTH = 20    # Fragments this short (after stripping) are skipped
MAX_SENTENCES = 3
MAX_SUMMARY_LENGTH = 150
NO_CONTENT = "No content available"


def summarize(email: "EmailContent") -> str:
    """
    Summarize an email body.

    Sentences are split on runs of '.', '!' and '?'. The first three
    fragments longer than 20 characters are joined with ". ". Without any
    such fragment the subject is returned instead (or "No content available").
    Summaries over 150 characters are cut hard at 150 and get "...".

    Args:
        email: Anything with subject and body string attributes.

    Returns:
        The summary text.
    """
    body = email.body or ""
    sentences = [
        fragment for fragment in SENTENCE_SPLIT_PATTERN.split(body)
        if len(fragment.strip()) > MIN_SENTENCE_LENGTH
    ]

    if not sentences:
        return email.subject or NO_CONTENT

    summary = ". ".join(sentences[:MAX_SENTENCES]).strip()
    if len(summary) > MAX_SUMMARY_LENGTH:
        return summary[:MAX_SUMMARY_LENGTH] + "..."
    return summary
