# =============================================================================
# Command Line Tests
# =============================================================================

import asyncio
import json

from nexmail.app import main, parse_args
from nexmail.storage import Database, Repository, View


LOTTERY_ARGS = [
    "check",
    "--from", "noreply@lottery.com",
    "--subject", "CONGRATULATIONS! YOU WON $1,000,000!!!",
    "--body", "Click here now to claim your prize! Limited time offer! Act immediately!",
]

DEALS_ARGS = [
    "check",
    "--from", "deals@shopping.com",
    "--subject", "Special Offer - 50% OFF Everything!",
    "--body", "Don't miss out on our exclusive sale. Shop now and save big!",
]


def test_parse_args_defaults():
    args = parse_args([])

    assert args.command is None
    assert args.db is None
    assert not args.debug


def test_check_spam(capsys):
    assert main(LOTTERY_ARGS) == 2

    out = capsys.readouterr().out
    assert "Score:    99/100 (SPAM)" in out
    assert "Category: spam" in out
    assert "  - Suspicious sender email pattern" in out


def test_check_clean(capsys):
    assert main(DEALS_ARGS) == 0

    out = capsys.readouterr().out
    assert "Score:    10/100 (not spam)" in out
    assert "Category: promotion" in out


def test_check_json(capsys):
    main(LOTTERY_ARGS + ["--json"])

    data = json.loads(capsys.readouterr().out)
    assert data["score"] == 99
    assert data["isSpam"] is True
    assert data["category"] == "spam"
    assert data["summary"] == "Click here now to claim your prize"
    assert "Found 3 spam phrase(s)" in data["reasons"]


def test_check_uses_configured_threshold(temp_dir, capsys):
    config_file = temp_dir / "custom.toml"
    config_file.write_text("[spam]\nthreshold = 10\n")

    assert main(["--config", str(config_file)] + DEALS_ARGS) == 2


def test_broken_config_fails_commands(temp_dir, capsys):
    config_file = temp_dir / "broken.toml"
    config_file.write_text("[spam\n")

    assert main(["--config", str(config_file)] + DEALS_ARGS) == 1
    assert "Invalid config file" in capsys.readouterr().err


def test_paths(capsys):
    assert main(["--paths"]) == 0
    assert "Config file:" in capsys.readouterr().out


def test_import(db_path, sample_eml, temp_dir, capsys):
    missing = temp_dir / "missing.eml"

    assert main(["--db", str(db_path), "import", str(sample_eml), str(missing)]) == 1

    captured = capsys.readouterr()
    assert f"{sample_eml}: inbox (score 0)" in captured.out
    assert "missing.eml" in captured.err

    async def inbox():
        async with Database(db_path) as db:
            return await Repository(db).get_emails(View.INBOX)

    emails = asyncio.run(inbox())
    assert [e.subject for e in emails] == ["Welcome to Supabase"]
    assert emails[0].summary.startswith("Thank you for signing up")
