# =============================================================================
# Spam Lexicons
# =============================================================================
# Fixed keyword, phrase and pattern tables used by the classifier and the
# categorizer.
#
# Everything here is immutable (tuples, frozensets and precompiled regexes)
# and built once at import time. Matching is substring-based: a keyword is
# counted at most once per field, however often it repeats.
# =============================================================================

import re

# Canonical spam keywords, matched case-insensitively in subject and body
SPAM_KEYWORDS: tuple[str, ...] = (
    "free money", "click here", "limited time", "act now", "urgent",
    "winner", "congratulations", "prize", "lottery", "viagra", "casino",
    "guaranteed", "no risk", "special offer", "exclusive deal", "buy now",
    "discount", "save up to", "free trial", "no credit check", "make money",
    "work from home", "get rich", "lose weight", "miracle", "secret",
    "hidden", "exclusive", "one time", "limited offer", "expires soon",
)

# Full phrases, matched case-insensitively against subject + body
SPAM_PHRASES: tuple[str, ...] = (
    "click here now",
    "act immediately",
    "limited time only",
    "you have won",
    "claim your prize",
    "urgent action required",
    "verify your account",
    "suspended account",
    "click below",
    "unsubscribe here",
)

# Markers of automated senders, matched case-insensitively in the From string
SPAM_SENDER_MARKERS: frozenset[str] = frozenset([
    "noreply",
    "no-reply",
    "donotreply",
    "notification",
    "alert",
    "service",
])

# Structural patterns checked against the subject in its original casing
SUSPICIOUS_SUBJECT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"[A-Z]{5,}"),                   # Shouting
    re.compile(r"!{2,}"),                       # Multiple exclamation marks
    re.compile(r"\$+"),                         # Dollar signs
    re.compile(r"https?://\S+", re.IGNORECASE), # Links in the subject
    re.compile(r"[0-9]{10,}"),                  # Long digit runs (phone numbers)
)

URL_PATTERN = re.compile(r"https?://\S+", re.IGNORECASE)

UPPERCASE_PATTERN = re.compile(r"[A-Z]")

# local-part@domain.tld with no whitespace or extra '@'
EMAIL_ADDRESS_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

# Sentence terminators for the summarizer
SENTENCE_SPLIT_PATTERN = re.compile(r"[.!?]+")

# Category cues, checked in this order against lowercased subject + body
PROMOTION_PATTERN = re.compile(r"sale|discount|offer|deal|promo|coupon|save|buy|shop")
SOCIAL_PATTERN = re.compile(r"facebook|twitter|linkedin|instagram|social|friend|follow")
UPDATES_PATTERN = re.compile(r"notification|alert|update|reminder|confirm|verify")
