# =============================================================================
# Repository - Data Access Layer
# =============================================================================
# Provides high-level CRUD operations for stored email.
#
# This is the main interface between the application logic and the database.
# It handles:
#   - Converting between Email models and database rows
#   - Mailbox views (inbox, promotions, spam, starred, sent, ...)
#   - Searching
#
# All methods are async for non-blocking database access.
# =============================================================================

import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING

from nexmail.core import Category, Email, EmailContent, EmailFlags, Mailbox
from nexmail.triage import triage

if TYPE_CHECKING:
    from nexmail.spam import SpamClassifier
    from nexmail.storage.database import Database


logger = logging.getLogger(__name__)


class View(Enum):
    """
    A filtered listing of the mailbox, as shown in the sidebar.

    The value is the label shown to the user.
    """
    ALL = "All Mail"
    INBOX = "Inbox"
    PROMOTION = "Promotions"
    SOCIAL = "Social"
    UPDATES = "Updates"
    SPAM = "Spam"
    STARRED = "Starred"
    SENT = "Sent"
    DRAFTS = "Drafts"


_SPAM = int(EmailFlags.SPAM)
_FLAGGED = int(EmailFlags.FLAGGED)

# Received mail in one category, excluding anything flagged as spam
_CATEGORY_VIEW = "mailbox = 'inbox' AND category = ? AND (flags & ?) = 0"

_VIEW_FILTERS: dict[View, tuple[str, tuple]] = {
    View.ALL: ("mailbox != 'drafts'", ()),
    View.INBOX: (_CATEGORY_VIEW, (Category.INBOX.value, _SPAM)),
    View.PROMOTION: (_CATEGORY_VIEW, (Category.PROMOTION.value, _SPAM)),
    View.SOCIAL: (_CATEGORY_VIEW, (Category.SOCIAL.value, _SPAM)),
    View.UPDATES: (_CATEGORY_VIEW, (Category.UPDATES.value, _SPAM)),
    View.SPAM: ("((flags & ?) != 0 OR category = 'spam')", (_SPAM,)),
    View.STARRED: ("(flags & ?) != 0", (_FLAGGED,)),
    View.SENT: ("mailbox = 'sent'", ()),
    View.DRAFTS: ("mailbox = 'drafts'", ()),
}

# Demo mail for a brand-new mailbox
SAMPLE_EMAILS: tuple[EmailContent, ...] = (
    EmailContent(
        sender="team@github.com",
        subject="Your repository has new activity",
        body="We noticed some new commits in your repository. Check them out!",
    ),
    EmailContent(
        sender="noreply@lottery.com",
        subject="CONGRATULATIONS! YOU WON $1,000,000!!!",
        body="Click here now to claim your prize! Limited time offer! Act immediately!",
    ),
    EmailContent(
        sender="support@supabase.com",
        subject="Welcome to Supabase",
        body=(
            "Thank you for signing up. We're excited to have you on board. "
            "Get started by reading our documentation."
        ),
    ),
    EmailContent(
        sender="deals@shopping.com",
        subject="Special Offer - 50% OFF Everything!",
        body="Don't miss out on our exclusive sale. Shop now and save big!",
    ),
    EmailContent(
        sender="free-money@scam.com",
        subject="FREE MONEY - NO RISK GUARANTEED!",
        body="Make money from home! No experience needed! Click here to get rich quick!",
    ),
)


class Repository:
    """
    Data access layer for NexMail.

    Usage:
        >>> repo = Repository(database)
        >>> emails = await repo.get_emails(View.INBOX, limit=50)
        >>> await repo.save_email(email)

    Attributes:
        db: Database instance for executing queries.
    """

    def __init__(self, db: "Database") -> None:
        """
        Initialize the repository.

        Args:
            db: Connected Database instance.
        """
        self.db = db

    # =========================================================================
    # Reading
    # =========================================================================

    async def get_emails(
        self,
        view: View = View.ALL,
        *,
        search: str = "",
        limit: int | None = None,
    ) -> list[Email]:
        """
        List the emails in a view, newest first.

        Args:
            view: Which view to list.
            search: Case-insensitive text that must appear in the subject,
                    sender or body.
            limit: Maximum number of results (None = all).

        Returns:
            List of Email objects.
        """
        where, params = _VIEW_FILTERS[view]
        query = f"SELECT * FROM emails WHERE {where} ORDER BY created_at DESC, id DESC"

        async with self.db.conn.execute(query, params) as cursor:
            rows = await cursor.fetchall()
        emails = [self._row_to_email(row) for row in rows]

        if search:
            needle = search.lower()
            emails = [
                e for e in emails
                if needle in e.subject.lower()
                or needle in e.sender.lower()
                or needle in e.body.lower()
            ]

        if limit is not None:
            emails = emails[:limit]
        return emails

    async def get_email(self, email_id: int) -> Email | None:
        """
        Get a single email.

        Args:
            email_id: Primary key of the email.

        Returns:
            Email if found, None otherwise.
        """
        async with self.db.conn.execute(
            "SELECT * FROM emails WHERE id = ?", (email_id,)
        ) as cursor:
            row = await cursor.fetchone()
            return self._row_to_email(row) if row else None

    async def count_emails(self) -> int:
        """Total number of stored emails."""
        async with self.db.conn.execute("SELECT COUNT(*) FROM emails") as cursor:
            row = await cursor.fetchone()
            return row[0] if row else 0

    async def count_by_view(self) -> dict[View, int]:
        """
        Number of emails in every view.

        Returns:
            Dictionary mapping each View to its email count.
        """
        counts: dict[View, int] = {}
        for view, (where, params) in _VIEW_FILTERS.items():
            async with self.db.conn.execute(
                f"SELECT COUNT(*) FROM emails WHERE {where}", params
            ) as cursor:
                row = await cursor.fetchone()
                counts[view] = row[0] if row else 0
        return counts

    # =========================================================================
    # Writing
    # =========================================================================

    async def save_email(self, email: Email) -> Email:
        """
        Save an email (insert or update).

        Args:
            email: Email to save.

        Returns:
            Saved email with ID populated.
        """
        values = (
            email.mailbox.name.lower(), email.sender, email.to, email.subject,
            email.body, email.category.value, email.spam_score, email.summary,
            int(email.flags), email.created_at.isoformat(), email.updated_at.isoformat(),
        )
        if email.id is None:
            cursor = await self.db.conn.execute(
                """INSERT INTO emails
                   (mailbox, sender, recipient, subject, body, category,
                    spam_score, summary, flags, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                values,
            )
            email.id = cursor.lastrowid
        else:
            await self.db.conn.execute(
                """UPDATE emails SET
                   mailbox=?, sender=?, recipient=?, subject=?, body=?, category=?,
                   spam_score=?, summary=?, flags=?, created_at=?, updated_at=?
                   WHERE id=?""",
                (*values, email.id),
            )
        await self.db.conn.commit()
        return email

    async def update_flags(self, email_id: int, flags: EmailFlags) -> None:
        """
        Update just the flags on an email (efficient for read/star operations).

        Args:
            email_id: ID of the email.
            flags: New flags value.
        """
        await self.db.conn.execute(
            "UPDATE emails SET flags = ?, updated_at = ? WHERE id = ?",
            (int(flags), datetime.now().isoformat(), email_id)
        )
        await self.db.conn.commit()

    async def update_classification(self, email: Email) -> None:
        """
        Store an email's flags, category, score and summary.

        Used after mark-as-spam / not-spam and after re-running triage.
        """
        email.updated_at = datetime.now()
        await self.db.conn.execute(
            """UPDATE emails SET
               flags=?, category=?, spam_score=?, summary=?, updated_at=?
               WHERE id=?""",
            (int(email.flags), email.category.value, email.spam_score,
             email.summary, email.updated_at.isoformat(), email.id)
        )
        await self.db.conn.commit()

    async def delete_email(self, email_id: int) -> None:
        """
        Delete an email permanently.

        Args:
            email_id: ID of email to delete.
        """
        await self.db.conn.execute(
            "DELETE FROM emails WHERE id = ?", (email_id,)
        )
        await self.db.conn.commit()

    async def seed_samples(
        self,
        user_email: str,
        classifier: "SpamClassifier | None" = None,
        *,
        flag_spam: bool = True,
    ) -> int:
        """
        Fill an empty mailbox with demo mail.

        Each sample is triaged like real incoming mail and is one hour older
        than the previous one.

        Args:
            user_email: Address used as the recipient.
            classifier: Classifier for triage.
            flag_spam: Passed to triage.

        Returns:
            Number of emails inserted (0 if the mailbox wasn't empty).
        """
        if await self.count_emails() > 0:
            return 0

        now = datetime.now()
        for index, sample in enumerate(SAMPLE_EMAILS):
            content = EmailContent(
                sender=sample.sender,
                subject=sample.subject,
                body=sample.body,
                to=user_email,
            )
            email = triage(
                content,
                classifier,
                received_at=now - timedelta(hours=index),
                flag_spam=flag_spam,
            )
            await self.save_email(email)

        logger.info(f"Seeded mailbox with {len(SAMPLE_EMAILS)} sample emails")
        return len(SAMPLE_EMAILS)

    def _row_to_email(self, row) -> Email:
        """Convert a database row to an Email object."""
        return Email(
            id=row[0],
            mailbox=Mailbox[row[1].upper()],
            sender=row[2] or "",
            to=row[3] or "",
            subject=row[4] or "",
            body=row[5] or "",
            category=Category(row[6]),
            spam_score=row[7] or 0,
            summary=row[8] or "",
            flags=EmailFlags(row[9]),
            created_at=datetime.fromisoformat(row[10]),
            updated_at=datetime.fromisoformat(row[11]),
        )
