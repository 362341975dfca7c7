# =============================================================================
# Triage
# =============================================================================
# Runs the content analysis on mail entering the mailbox:
#   - Incoming mail gets a spam score, a category and a summary, and is
#     flagged as spam when the classifier says so
#   - Outgoing mail gets a summary and a verdict the compose screen can use
#     to warn before sending
# =============================================================================

import logging
from datetime import datetime

from nexmail.core import Category, Email, EmailContent, EmailFlags, Mailbox
from nexmail.spam import ClassificationResult, SpamClassifier, categorize, summarize


logger = logging.getLogger(__name__)


def triage(
    content: EmailContent,
    classifier: SpamClassifier | None = None,
    *,
    mailbox: Mailbox = Mailbox.INBOX,
    received_at: datetime | None = None,
    flag_spam: bool = True,
) -> Email:
    """
    Build a stored email from incoming content.

    Args:
        content: The email's text fields.
        classifier: Classifier to use. Defaults to the standard threshold.
        mailbox: Destination mailbox.
        received_at: Timestamp for the record. Defaults to now.
        flag_spam: Flag spam verdicts. When False, spam is only scored and
            the message stays in the inbox category.

    Returns:
        A new, unsaved Email with score, category, summary and flags set.
    """
    classifier = classifier or SpamClassifier()
    result = classifier.evaluate(content)
    category = categorize(content, classifier)

    email = _build_email(content, mailbox, received_at)
    email.spam_score = result.score
    email.category = category
    email.summary = summarize(content)
    if result.is_spam:
        if flag_spam:
            email.flags |= EmailFlags.SPAM
        else:
            email.category = Category.INBOX

    _log_verdict(content, result, category)
    return email


def retriage(
    email: Email,
    classifier: SpamClassifier | None = None,
    *,
    flag_spam: bool = True,
) -> ClassificationResult:
    """
    Re-run the analysis on an existing email, updating it in place.

    The user's read and starred flags are kept. Received mail gets its spam
    flag and category from the new verdict, as triage() would set them.
    Sent mail and drafts are never flagged; only their score and summary
    are refreshed.

    Args:
        email: The email to re-check.
        classifier: Classifier to use. Defaults to the standard threshold.
        flag_spam: Flag spam verdicts. When False, spam is only scored and
            the message stays in the inbox category.

    Returns:
        The new classification result.
    """
    classifier = classifier or SpamClassifier()
    result = classifier.evaluate(email.content)

    email.spam_score = result.score
    email.summary = summarize(email.content)
    email.updated_at = datetime.now()

    if email.mailbox != Mailbox.INBOX:
        return result

    email.category = categorize(email.content, classifier)
    if result.is_spam and flag_spam:
        email.flags |= EmailFlags.SPAM
    else:
        email.flags &= ~EmailFlags.SPAM
        if email.category == Category.SPAM:
            email.category = Category.INBOX

    _log_verdict(email.content, result, email.category)
    return result


def prepare_outgoing(
    content: EmailContent,
    classifier: SpamClassifier | None = None,
    *,
    draft: bool = False,
) -> tuple[Email, ClassificationResult]:
    """
    Build the stored copy of a composed email.

    Sent mail is never flagged as spam; the verdict is returned so the
    caller can warn the user before sending.

    Args:
        content: The composed email.
        classifier: Classifier to use.
        draft: Store in Drafts instead of Sent.

    Returns:
        Tuple of (unsaved Email, classification result).
    """
    classifier = classifier or SpamClassifier()
    result = classifier.evaluate(content)

    email = _build_email(content, Mailbox.DRAFTS if draft else Mailbox.SENT, None)
    email.flags = EmailFlags.SEEN
    email.category = Category.INBOX
    email.spam_score = result.score
    email.summary = summarize(content)

    if result.is_spam:
        logger.info(f"Outgoing mail looks like spam (score={result.score}): {_short(content.subject)}")
    return email, result


def _build_email(
    content: EmailContent,
    mailbox: Mailbox,
    timestamp: datetime | None,
) -> Email:
    timestamp = timestamp or datetime.now()
    return Email(
        mailbox=mailbox,
        sender=content.sender,
        to=content.to,
        subject=content.subject,
        body=content.body,
        created_at=timestamp,
        updated_at=timestamp,
    )


def _log_verdict(content: EmailContent, result: ClassificationResult, category: Category) -> None:
    if result.is_spam:
        logger.info(f"Spam detected (score={result.score}): {_short(content.subject)}")
    logger.debug(
        f"Triaged {_short(content.subject)}: score={result.score} "
        f"category={category.value} reasons={list(result.reasons)}"
    )


def _short(subject: str) -> str:
    return subject[:50] if subject else "(no subject)"
