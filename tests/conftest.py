# =============================================================================
# Pytest Configuration and Fixtures
# =============================================================================
# Shared fixtures for the NexMail test suite.
# =============================================================================

import logging
import pytest
import tempfile
from pathlib import Path

from nexmail.core import EmailContent


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def db_path(temp_dir):
    """Path for a throwaway mailbox database."""
    return temp_dir / "mailbox.db"


@pytest.fixture(autouse=True)
def isolated_xdg(temp_dir, monkeypatch):
    """Keep config, data and logs of every test out of the real home directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(temp_dir / "data"))
    monkeypatch.setenv("XDG_STATE_HOME", str(temp_dir / "state"))
    yield

    # setup_logging() may have attached a file handler inside temp_dir
    app_logger = logging.getLogger("nexmail")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def lottery_email():
    """The classic prize scam: automated sender, shouting subject, spam phrases."""
    return EmailContent(
        sender="noreply@lottery.com",
        subject="CONGRATULATIONS! YOU WON $1,000,000!!!",
        body="Click here now to claim your prize! Limited time offer! Act immediately!",
    )


@pytest.fixture
def github_email():
    """An ordinary notification from a real service."""
    return EmailContent(
        sender="team@github.com",
        subject="Your repository has new activity",
        body="We noticed some new commits in your repository. Check them out!",
    )


@pytest.fixture
def deals_email():
    """A marketing email that is pushy but not spam."""
    return EmailContent(
        sender="deals@shopping.com",
        subject="Special Offer - 50% OFF Everything!",
        body="Don't miss out on our exclusive sale. Shop now and save big!",
    )


@pytest.fixture
def free_money_email():
    """Keyword-heavy spam from a plausible-looking address."""
    return EmailContent(
        sender="free-money@scam.com",
        subject="FREE MONEY - NO RISK GUARANTEED!",
        body="Make money from home! No experience needed! Click here to get rich quick!",
    )


@pytest.fixture
def sample_eml(temp_dir):
    """A plain text .eml file with encoded headers."""
    path = temp_dir / "welcome.eml"
    path.write_text(
        "From: =?utf-8?q?Supabase_Team?= <support@supabase.com>\r\n"
        "To: me@example.com\r\n"
        "Subject: Welcome to Supabase\r\n"
        "Date: Mon, 15 Jan 2024 10:30:00 +0000\r\n"
        "Content-Type: text/plain; charset=utf-8\r\n"
        "\r\n"
        "Thank you for signing up. We're excited to have you on board. "
        "Get started by reading our documentation.\r\n"
    )
    return path


@pytest.fixture
def sample_html_eml(temp_dir):
    """A multipart message whose only text is HTML."""
    path = temp_dir / "newsletter.eml"
    path.write_text(
        "From: news@example.com\r\n"
        "To: me@example.com\r\n"
        "Subject: Monthly newsletter\r\n"
        "MIME-Version: 1.0\r\n"
        'Content-Type: multipart/alternative; boundary="XYZ"\r\n'
        "\r\n"
        "--XYZ\r\n"
        "Content-Type: text/html; charset=utf-8\r\n"
        "\r\n"
        "<html><head><style>p { color: red; }</style></head>"
        "<body><h1>Hello reader</h1>"
        '<p>Read the <a href="https://example.com/post">latest post</a>.</p>'
        "</body></html>\r\n"
        "--XYZ--\r\n"
    )
    return path
