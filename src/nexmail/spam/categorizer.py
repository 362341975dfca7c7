# =============================================================================
# Email Categorizer
# =============================================================================
# Assigns one coarse category to an email. The classifier runs first (spam
# wins over everything); otherwise keyword cues decide between promotion,
# social and updates, in that order, and anything else is plain inbox.
# =============================================================================

from typing import TYPE_CHECKING

from nexmail.core import Category
from nexmail.spam.classifier import SpamClassifier, evaluate
from nexmail.spam.lexicon import PROMOTION_PATTERN, SOCIAL_PATTERN, UPDATES_PATTERN

if TYPE_CHECKING:
    from nexmail.core import EmailContent


# Checked in order, first match wins
CATEGORY_RULES = (
    (PROMOTION_PATTERN, Category.PROMOTION),
    (SOCIAL_PATTERN, Category.SOCIAL),
    (UPDATES_PATTERN, Category.UPDATES),
)


def categorize(
    email: "EmailContent",
    classifier: SpamClassifier | None = None,
) -> Category:
    """
    Categorize an email.

    Args:
        email: Anything with subject and body attributes. A missing sender
               is scored as an empty (invalid) address.
        classifier: Classifier to use for the spam check. Defaults to the
                    module-level classifier with the standard threshold.

    Returns:
        The category.
    """
    result = classifier.evaluate(email) if classifier else evaluate(email)
    if result.is_spam:
        return Category.SPAM

    text = f"{email.subject or ''} {email.body or ''}".lower()
    for pattern, category in CATEGORY_RULES:
        if pattern.search(text):
            return category

    return Category.INBOX
