# =============================================================================
# UI Helper Tests
# =============================================================================
# The pure functions behind the compose and preview widgets.
# =============================================================================

import pytest

from nexmail.spam import evaluate
from nexmail.triage import triage
from nexmail.ui.screens.compose import describe_score, validate_outgoing
from nexmail.ui.widgets.message_preview import escape, render_analysis


class TestValidateOutgoing:
    def test_valid(self):
        assert validate_outgoing("friend@example.com", "Hi", "Hello there") is None

    @pytest.mark.parametrize("to,subject,body", [
        ("", "Hi", "Hello"),
        ("friend@example.com", "  ", "Hello"),
        ("friend@example.com", "Hi", ""),
    ])
    def test_missing_fields(self, to, subject, body):
        assert validate_outgoing(to, subject, body) == "Please fill in all fields"

    def test_bad_address(self):
        assert validate_outgoing("friend-at-example", "Hi", "Hello") == "Invalid email address"


class TestDescribeScore:
    def test_spam(self, lottery_email):
        text = describe_score(evaluate(lottery_email))

        assert "Looks like spam (99/100)" in text
        assert "Found 1 spam keyword(s) in subject" in text

    def test_some_signals(self, deals_email):
        assert "Spam score 10/100" in describe_score(evaluate(deals_email))

    def test_clean(self, github_email):
        assert describe_score(evaluate(github_email)) == "[green]Spam score 0/100[/]"


class TestRenderAnalysis:
    def test_flagged_spam(self, lottery_email):
        email = triage(lottery_email)
        text = render_analysis(email, evaluate(lottery_email))

        assert " SPAM " in text
        assert "Spam score: 99/100" in text
        assert "Category: spam" in text
        assert "  • Found 3 spam phrase(s)" in text

    def test_suspicious_but_not_flagged(self, lottery_email):
        email = triage(lottery_email)
        email.mark_not_spam()
        text = render_analysis(email, evaluate(lottery_email))

        assert "Suspicious (Score: 99)" in text

    def test_legitimate(self, github_email):
        email = triage(github_email)
        text = render_analysis(email, evaluate(github_email))

        assert "Looks legitimate" in text
        assert "•" not in text


def test_escape_markup():
    assert escape("[bold]not markup[/]") == "\\[bold]not markup\\[/]"
    assert escape("") == ""
