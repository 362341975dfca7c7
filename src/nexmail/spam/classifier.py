# =============================================================================
# Heuristic Spam Classifier
# =============================================================================
# Scores an email from 0 to 100 using a fixed set of independent signals.
#
# How it works:
#   1. Each signal looks at the sender, subject and/or body
#   2. A signal that fires adds a fixed (or count-based) number of points
#      and records one human-readable reason
#   3. The points are summed and clamped to 100
#   4. A score >= the threshold (70 by default) means spam
#
# Signals are evaluated in a fixed order, and reasons are reported in that
# same order. Keyword checks are case-insensitive; the structural subject
# checks (patterns, capitalization) use the original casing.
# =============================================================================

from dataclasses import dataclass
from typing import TYPE_CHECKING

from nexmail.spam.lexicon import (
    EMAIL_ADDRESS_PATTERN,
    SPAM_KEYWORDS,
    SPAM_PHRASES,
    SPAM_SENDER_MARKERS,
    SUSPICIOUS_SUBJECT_PATTERNS,
    UPPERCASE_PATTERN,
    URL_PATTERN,
)

if TYPE_CHECKING:
    from nexmail.core import EmailContent


# Score at or above which an email is spam
SPAM_THRESHOLD = 70
MAX_SCORE = 100

# Signal weights and limits
SUBJECT_KEYWORD_POINTS = 10
BODY_KEYWORD_POINTS = 5
BODY_KEYWORD_MIN_COUNT = 3
BODY_KEYWORD_CAP = 30
SUSPICIOUS_PATTERN_POINTS = 15
URL_POINTS = 20
URL_MAX_COUNT = 3
SENDER_PATTERN_POINTS = 10
CAPS_POINTS = 15
CAPS_RATIO = 0.5
CAPS_MIN_SUBJECT_LENGTH = 10
EXCLAMATION_POINTS = 10
EXCLAMATION_MAX_COUNT = 2
SHORT_CONTENT_POINTS = 10
SHORT_BODY_LENGTH = 50
SHORT_SUBJECT_LENGTH = 10
INVALID_SENDER_POINTS = 25
PHRASE_POINTS = 8


@dataclass(frozen=True)
class Signal:
    """
    One triggered heuristic.

    Attributes:
        name: Stable identifier of the rule (e.g. "subject_keywords").
        points: Points the rule contributed before clamping.
        reason: Human-readable explanation.
    """
    name: str
    points: int
    reason: str


@dataclass(frozen=True)
class ClassificationResult:
    """
    The verdict for one email.

    Attributes:
        score: Spam score in [0, 100].
        reasons: One reason per triggered signal, in evaluation order.
        is_spam: True if score reached the spam threshold.
        signals: The triggered signals themselves, same order as reasons.
    """
    score: int
    reasons: tuple[str, ...]
    is_spam: bool
    signals: tuple[Signal, ...] = ()

    def to_dict(self) -> dict:
        """Plain-data form, e.g. for JSON output."""
        return {
            "score": self.score,
            "reasons": list(self.reasons),
            "isSpam": self.is_spam,
        }


class SpamClassifier:
    """
    Rule-based spam classifier.

    The classifier holds no mutable state: every call to evaluate() is
    independent, so one instance can be shared freely.

    Usage:
        >>> classifier = SpamClassifier()
        >>> result = classifier.evaluate(content)
        >>> if result.is_spam:
        ...     print(f"Probably spam ({result.score}): {result.reasons}")

    Attributes:
        threshold: Score at or above which an email counts as spam.
    """

    def __init__(self, threshold: int = SPAM_THRESHOLD) -> None:
        self.threshold = threshold

    def evaluate(self, email: "EmailContent") -> ClassificationResult:
        """
        Score an email.

        Args:
            email: Anything with sender/subject/body string attributes.

        Returns:
            The classification result. Never raises for string input.
        """
        raw_subject = email.subject or ""
        raw_body = email.body or ""
        raw_sender = getattr(email, "sender", "") or ""

        subject = raw_subject.lower()
        body = raw_body.lower()
        sender = raw_sender.lower()
        full_text = f"{subject} {body}"

        signals: list[Signal] = []

        # Spam keywords in subject
        subject_count = _count_keywords(subject)
        if subject_count > 0:
            signals.append(Signal(
                "subject_keywords",
                subject_count * SUBJECT_KEYWORD_POINTS,
                f"Found {subject_count} spam keyword(s) in subject",
            ))

        # Spam keywords in body (higher bar: long bodies match incidentally)
        body_count = _count_keywords(body)
        if body_count >= BODY_KEYWORD_MIN_COUNT:
            signals.append(Signal(
                "body_keywords",
                min(body_count * BODY_KEYWORD_POINTS, BODY_KEYWORD_CAP),
                f"Found {body_count} spam keyword(s) in body",
            ))

        # Structural patterns in the subject, one flat bonus
        if any(pattern.search(raw_subject) for pattern in SUSPICIOUS_SUBJECT_PATTERNS):
            signals.append(Signal(
                "suspicious_pattern",
                SUSPICIOUS_PATTERN_POINTS,
                "Suspicious pattern in subject line",
            ))

        # Too many links
        url_count = len(URL_PATTERN.findall(full_text))
        if url_count > URL_MAX_COUNT:
            signals.append(Signal(
                "many_urls",
                URL_POINTS,
                f"Multiple URLs found ({url_count})",
            ))

        # Automated-looking sender
        if any(marker in sender for marker in SPAM_SENDER_MARKERS):
            signals.append(Signal(
                "sender_pattern",
                SENDER_PATTERN_POINTS,
                "Suspicious sender email pattern",
            ))

        # Shouting subject (length guard also avoids dividing by zero)
        if len(raw_subject) > CAPS_MIN_SUBJECT_LENGTH:
            caps_ratio = len(UPPERCASE_PATTERN.findall(raw_subject)) / len(raw_subject)
            if caps_ratio > CAPS_RATIO:
                signals.append(Signal(
                    "capitalization",
                    CAPS_POINTS,
                    "Excessive capitalization in subject",
                ))

        # Exclamation marks
        if raw_subject.count("!") > EXCLAMATION_MAX_COUNT:
            signals.append(Signal(
                "exclamation_marks",
                EXCLAMATION_POINTS,
                "Excessive exclamation marks",
            ))

        # Nearly empty email
        if len(body) < SHORT_BODY_LENGTH and len(subject) < SHORT_SUBJECT_LENGTH:
            signals.append(Signal(
                "short_content",
                SHORT_CONTENT_POINTS,
                "Very short email content",
            ))

        # Sender is not a plain address
        if not is_valid_address(raw_sender):
            signals.append(Signal(
                "invalid_sender",
                INVALID_SENDER_POINTS,
                "Invalid email format",
            ))

        # Well-known spam phrases anywhere
        phrase_count = sum(1 for phrase in SPAM_PHRASES if phrase in full_text)
        if phrase_count > 0:
            signals.append(Signal(
                "spam_phrases",
                phrase_count * PHRASE_POINTS,
                f"Found {phrase_count} spam phrase(s)",
            ))

        score = min(sum(signal.points for signal in signals), MAX_SCORE)

        return ClassificationResult(
            score=score,
            reasons=tuple(signal.reason for signal in signals),
            is_spam=score >= self.threshold,
            signals=tuple(signals),
        )


def is_valid_address(address: str) -> bool:
    """Returns True if address looks like local-part@domain.tld."""
    return EMAIL_ADDRESS_PATTERN.fullmatch(address or "") is not None


def _count_keywords(text: str) -> int:
    """Number of distinct spam keywords contained in already-lowercased text."""
    return sum(1 for keyword in SPAM_KEYWORDS if keyword in text)


_default_classifier = SpamClassifier()


def evaluate(email: "EmailContent") -> ClassificationResult:
    """Score an email with the default threshold."""
    return _default_classifier.evaluate(email)
