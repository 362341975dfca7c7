# =============================================================================
# Email Model
# =============================================================================
# Represents an email record in the local mailbox, plus the read-only view
# (EmailContent) that the classifier works on.
#
# An Email carries:
#   - Envelope information (from, to, subject)
#   - A plain text body
#   - Local flags (read, starred, spam)
#   - Triage results (spam score, category, summary)
#
# EmailContent is deliberately tiny: the classifier, summarizer and
# categorizer only ever look at the four string fields.
# =============================================================================

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntFlag, auto
from typing import Any, Mapping


class EmailFlags(IntFlag):
    """
    Local email flags, stored as a bitmask.

    Usage:
        # Set flags
        email.flags = EmailFlags.SEEN | EmailFlags.FLAGGED

        # Check flags
        if email.flags & EmailFlags.SEEN:
            print("Email has been read")
    """
    NONE = 0            # No flags set
    SEEN = 1 << 0       # Email has been read
    FLAGGED = 1 << 1    # User-starred
    SPAM = 1 << 2       # Classified or marked as spam


class Mailbox(Enum):
    """Where an email lives in the local store."""
    INBOX = auto()      # Received mail
    SENT = auto()       # Mail composed and sent by the user
    DRAFTS = auto()     # Unsent drafts


class Category(str, Enum):
    """
    Coarse content category assigned by the categorizer.

    Values are the plain lowercase labels, so a Category compares equal to
    (and serializes as) its string form.
    """
    INBOX = "inbox"
    SPAM = "spam"
    PROMOTION = "promotion"
    SOCIAL = "social"
    UPDATES = "updates"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class EmailContent:
    """
    The classifier's input: an immutable view of an email's text fields.

    Attributes:
        sender: The "From" string (address, possibly with a display name).
        subject: Subject line, may be empty.
        body: Plain text body, may be empty.
        to: Recipient string, optional.
    """
    sender: str = ""
    subject: str = ""
    body: str = ""
    to: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EmailContent":
        """
        Build content from a plain record using the keys from/to/subject/body.

        Missing or None values become empty strings.
        """
        return cls(
            sender=str(data.get("from") or ""),
            subject=str(data.get("subject") or ""),
            body=str(data.get("body") or ""),
            to=str(data.get("to") or ""),
        )


@dataclass
class Email:
    """
    An email stored in the local mailbox.

    Attributes:
        mailbox: Which mailbox the email belongs to (inbox, sent, drafts).
        sender: The "From" address.
        to: The "To" address.
        subject: Subject line.
        body: Plain text body.
        category: Category assigned at triage time.
        spam_score: Classifier score (0-100) computed at triage time.
        summary: Extractive summary shown in previews.
        flags: Read/starred/spam flags.
        created_at: When the email entered the mailbox.
        updated_at: Last local modification.
        id: Database primary key.

    Example:
        >>> email = Email(
        ...     sender="alice@example.com",
        ...     to="bob@example.com",
        ...     subject="Hello",
        ...     body="Hello Bob!",
        ... )
    """

    mailbox: Mailbox = Mailbox.INBOX

    # Envelope
    sender: str = ""
    to: str = ""
    subject: str = ""
    body: str = ""

    # Triage results
    category: Category = Category.INBOX
    spam_score: int = 0
    summary: str = ""

    flags: EmailFlags = EmailFlags.NONE

    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    # Database field
    id: int | None = None

    # -------------------------------------------------------------------------
    # Flag helpers
    # -------------------------------------------------------------------------

    @property
    def is_read(self) -> bool:
        """Returns True if the email has been read."""
        return bool(self.flags & EmailFlags.SEEN)

    @property
    def is_starred(self) -> bool:
        """Returns True if the email is starred."""
        return bool(self.flags & EmailFlags.FLAGGED)

    @property
    def is_spam(self) -> bool:
        """Returns True if the email is flagged as spam."""
        return bool(self.flags & EmailFlags.SPAM)

    @property
    def content(self) -> EmailContent:
        """The classifier view of this email."""
        return EmailContent(
            sender=self.sender,
            subject=self.subject,
            body=self.body,
            to=self.to,
        )

    def mark_read(self) -> None:
        """Mark this email as read."""
        self.flags |= EmailFlags.SEEN

    def mark_unread(self) -> None:
        """Mark this email as unread."""
        self.flags &= ~EmailFlags.SEEN

    def toggle_starred(self) -> None:
        """Toggle the starred status."""
        self.flags ^= EmailFlags.FLAGGED

    def mark_spam(self) -> None:
        """Flag as spam and move into the spam category."""
        self.flags |= EmailFlags.SPAM
        self.category = Category.SPAM

    def mark_not_spam(self) -> None:
        """Clear the spam flag; a spam category falls back to inbox."""
        self.flags &= ~EmailFlags.SPAM
        if self.category == Category.SPAM:
            self.category = Category.INBOX

    def __str__(self) -> str:
        read_marker = " " if self.is_read else "*"
        star_marker = "!" if self.is_starred else " "
        return f"{read_marker}{star_marker} {self.sender}: {self.subject}"

    def __repr__(self) -> str:
        return (
            f"Email(id={self.id}, subject={self.subject!r}, "
            f"from={self.sender!r}, category={self.category.value}, flags={self.flags})"
        )
