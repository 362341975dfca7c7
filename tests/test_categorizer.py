# =============================================================================
# Categorizer Tests
# =============================================================================

from types import SimpleNamespace

from nexmail.core import Category, EmailContent
from nexmail.spam import SpamClassifier, categorize


def test_spam_wins(lottery_email):
    assert categorize(lottery_email) == Category.SPAM


def test_plain_mail_is_inbox(github_email):
    assert categorize(github_email) == Category.INBOX


def test_promotion(deals_email):
    assert categorize(deals_email) == Category.PROMOTION


def test_social():
    content = EmailContent(
        sender="notify@network.example",
        subject="Alice wants to be your friend",
        body="Accept the request to see the latest photos and posts from your network.",
    )

    assert categorize(content) == Category.SOCIAL


def test_updates():
    content = EmailContent(
        sender="clinic@example.com",
        subject="Reminder: your appointment tomorrow",
        body="This is a reminder that your dental appointment is scheduled for tomorrow morning.",
    )

    assert categorize(content) == Category.UPDATES


def test_promotion_is_checked_before_updates():
    content = EmailContent(
        sender="store@example.com",
        subject="Update: big sale this weekend",
        body="Our store has new items for the whole family this weekend only.",
    )

    assert categorize(content) == Category.PROMOTION


def test_classifier_threshold_is_used(deals_email):
    assert categorize(deals_email, SpamClassifier(threshold=10)) == Category.SPAM


def test_missing_sender_is_treated_as_invalid():
    # No sender attribute at all: the classifier sees an empty address
    email = SimpleNamespace(subject="Hi", body="")

    assert categorize(email) == Category.INBOX
    assert categorize(email, SpamClassifier(threshold=35)) == Category.SPAM
