# =============================================================================
# Storage Tests
# =============================================================================
# Database and Repository against a throwaway SQLite file.
# =============================================================================

import asyncio

import pytest

from nexmail.core import Category, EmailContent, EmailFlags, Mailbox
from nexmail.storage import Database, Repository, View
from nexmail.triage import prepare_outgoing, triage


def run_with_repo(db_path, scenario):
    """Run an async scenario(repo) against a fresh database."""
    async def runner():
        async with Database(db_path) as db:
            return await scenario(Repository(db))
    return asyncio.run(runner())


def test_connection_required(db_path):
    db = Database(db_path)

    with pytest.raises(RuntimeError):
        db.conn


def test_seed_samples(db_path):
    async def scenario(repo):
        first = await repo.seed_samples("me@example.com")
        second = await repo.seed_samples("me@example.com")
        return first, second, await repo.count_by_view()

    first, second, counts = run_with_repo(db_path, scenario)

    assert first == 5
    assert second == 0
    assert counts[View.ALL] == 5
    assert counts[View.INBOX] == 2
    assert counts[View.PROMOTION] == 1
    assert counts[View.SPAM] == 2
    assert counts[View.SOCIAL] == 0
    assert counts[View.STARRED] == 0
    assert counts[View.SENT] == 0


def test_seeded_mail_is_triaged(db_path):
    async def scenario(repo):
        await repo.seed_samples("me@example.com")
        return await repo.get_emails(View.SPAM)

    spam = run_with_repo(db_path, scenario)

    assert {e.sender for e in spam} == {"noreply@lottery.com", "free-money@scam.com"}
    assert all(e.is_spam and e.spam_score >= 70 for e in spam)
    assert all(e.to == "me@example.com" for e in spam)


def test_newest_first(db_path):
    async def scenario(repo):
        await repo.seed_samples("me@example.com")
        return await repo.get_emails(View.ALL)

    emails = run_with_repo(db_path, scenario)

    assert emails[0].sender == "team@github.com"
    assert emails[-1].sender == "free-money@scam.com"
    assert [e.created_at for e in emails] == sorted((e.created_at for e in emails), reverse=True)


def test_search_and_limit(db_path):
    async def scenario(repo):
        await repo.seed_samples("me@example.com")
        by_subject = await repo.get_emails(View.ALL, search="SUPABASE")
        by_body = await repo.get_emails(View.ALL, search="commits")
        in_view = await repo.get_emails(View.SPAM, search="commits")
        limited = await repo.get_emails(View.ALL, limit=2)
        return by_subject, by_body, in_view, limited

    by_subject, by_body, in_view, limited = run_with_repo(db_path, scenario)

    assert [e.sender for e in by_subject] == ["support@supabase.com"]
    assert [e.sender for e in by_body] == ["team@github.com"]
    assert in_view == []
    assert len(limited) == 2


def test_save_and_get(db_path, github_email):
    async def scenario(repo):
        saved = await repo.save_email(triage(github_email))
        return saved, await repo.get_email(saved.id), await repo.get_email(9999)

    saved, loaded, missing = run_with_repo(db_path, scenario)

    assert saved.id is not None
    assert loaded == saved
    assert missing is None


def test_flags_and_starred_view(db_path, github_email):
    async def scenario(repo):
        email = await repo.save_email(triage(github_email))
        email.mark_read()
        email.toggle_starred()
        await repo.update_flags(email.id, email.flags)
        return await repo.get_email(email.id), await repo.get_emails(View.STARRED)

    loaded, starred = run_with_repo(db_path, scenario)

    assert loaded.flags == EmailFlags.SEEN | EmailFlags.FLAGGED
    assert [e.id for e in starred] == [loaded.id]


def test_mark_spam_moves_between_views(db_path, github_email):
    async def scenario(repo):
        email = await repo.save_email(triage(github_email))
        email.mark_spam()
        await repo.update_classification(email)
        flagged = await repo.count_by_view()

        email.mark_not_spam()
        await repo.update_classification(email)
        restored = await repo.count_by_view()
        return flagged, restored

    flagged, restored = run_with_repo(db_path, scenario)

    assert flagged[View.SPAM] == 1
    assert flagged[View.INBOX] == 0
    assert restored[View.SPAM] == 0
    assert restored[View.INBOX] == 1


def test_outgoing_views(db_path):
    content = EmailContent(
        sender="me@example.com",
        to="friend@example.com",
        subject="Dinner on Friday",
        body="Are you free for dinner on Friday evening? I found a nice new place downtown.",
    )

    async def scenario(repo):
        sent, _ = prepare_outgoing(content)
        draft, _ = prepare_outgoing(content, draft=True)
        await repo.save_email(sent)
        await repo.save_email(draft)
        return await repo.count_by_view(), await repo.get_emails(View.DRAFTS)

    counts, drafts = run_with_repo(db_path, scenario)

    assert counts[View.SENT] == 1
    assert counts[View.DRAFTS] == 1
    assert counts[View.ALL] == 1
    assert counts[View.INBOX] == 0
    assert drafts[0].mailbox == Mailbox.DRAFTS


def test_update_existing_email(db_path, deals_email):
    async def scenario(repo):
        email = await repo.save_email(triage(deals_email))
        email.subject = "Edited subject"
        email.category = Category.UPDATES
        await repo.save_email(email)
        return await repo.get_email(email.id), await repo.count_emails()

    loaded, total = run_with_repo(db_path, scenario)

    assert loaded.subject == "Edited subject"
    assert loaded.category == Category.UPDATES
    assert total == 1


def test_delete(db_path, github_email):
    async def scenario(repo):
        email = await repo.save_email(triage(github_email))
        await repo.delete_email(email.id)
        return await repo.get_email(email.id), await repo.count_emails()

    loaded, total = run_with_repo(db_path, scenario)

    assert loaded is None
    assert total == 0


def test_data_survives_reconnect(db_path, github_email):
    async def write(repo):
        return (await repo.save_email(triage(github_email))).id

    async def read(repo):
        return await repo.get_emails(View.INBOX)

    email_id = run_with_repo(db_path, write)
    emails = run_with_repo(db_path, read)

    assert [e.id for e in emails] == [email_id]
