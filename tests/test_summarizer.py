# =============================================================================
# Summarizer Tests
# =============================================================================

from nexmail.core import EmailContent
from nexmail.spam import summarize
from nexmail.spam.summarizer import NO_CONTENT


def test_short_fragments_are_skipped(github_email):
    assert summarize(github_email) == "We noticed some new commits in your repository"


def test_first_three_sentences():
    body = (
        "This is the first sentence here. This is the second sentence here! "
        "Third sentence is right here? Fourth sentence never shows up."
    )
    summary = summarize(EmailContent(subject="Notes", body=body))

    assert summary.startswith("This is the first sentence here. ")
    assert "second sentence" in summary
    assert "Third sentence" in summary
    assert "Fourth" not in summary


def test_long_summary_is_truncated():
    sentence = "This sentence is deliberately long so that the summary has to be cut short"
    summary = summarize(EmailContent(subject="Long", body=". ".join([sentence] * 4)))

    assert len(summary) == 153
    assert summary.endswith("...")
    assert summary.startswith(sentence)


def test_falls_back_to_subject():
    content = EmailContent(subject="Lunch?", body="Sure. See you at noon!")

    assert summarize(content) == "Lunch?"


def test_no_content():
    assert summarize(EmailContent()) == NO_CONTENT
    assert NO_CONTENT == "No content available"


def test_sentence_of_exactly_twenty_characters_is_skipped():
    twenty = "a" * 20
    content = EmailContent(subject="Subject line", body=f"{twenty}. Short.")

    assert summarize(content) == "Subject line"
