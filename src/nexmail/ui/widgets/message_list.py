# =============================================================================
# Message List Widget
# =============================================================================
# A table of emails.
#
# Columns: read status, star, spam, from, subject, category, date.
# Unread rows are bold; spam rows get a red marker.
# =============================================================================

from datetime import datetime
from typing import TYPE_CHECKING

from textual.widgets import DataTable
from textual.widgets.data_table import RowKey

if TYPE_CHECKING:
    from nexmail.core import Email


class MessageList(DataTable):
    """
    A table widget displaying emails.

    Usage:
        >>> message_list = MessageList()
        >>> await message_list.load_emails(emails)
        >>> email = message_list.get_selected_email()
    """

    # Column configuration
    COLUMNS = [
        ("", 2),            # Read/unread indicator
        ("★", 2),           # Star indicator
        ("⚠", 2),           # Spam indicator
        ("From", 25),       # Sender
        ("Subject", 0),     # Subject (flexible width)
        ("Category", 10),   # Triage category
        ("Date", 12),       # Date
    ]

    def __init__(
        self,
        *,
        time_format: str = "%H:%M",
        date_format: str = "%b %d",
        **kwargs,
    ) -> None:
        """
        Initialize the message list.

        Args:
            time_format: strftime format for emails from today.
            date_format: strftime format for emails older than a week.
            **kwargs: Additional arguments passed to DataTable.
        """
        super().__init__(**kwargs)
        self._emails: dict[RowKey, "Email"] = {}
        self._time_format = time_format
        self._date_format = date_format

        self.cursor_type = "row"
        self.zebra_stripes = True

    def on_mount(self) -> None:
        """Set up columns when widget is mounted."""
        for label, width in self.COLUMNS:
            if width > 0:
                self.add_column(label, width=width)
            else:
                self.add_column(label)  # Flexible width

    async def load_emails(self, emails: list["Email"]) -> None:
        """
        Load emails into the table.

        Args:
            emails: Emails to display, in display order.
        """
        self.clear()
        self._emails.clear()

        for email in emails:
            row_key = self.add_row(*self._row_cells(email))
            self._emails[row_key] = email

    def _row_cells(self, email: "Email") -> tuple[str, ...]:
        read_indicator = " " if email.is_read else "●"
        star_indicator = "★" if email.is_starred else " "
        spam_indicator = "[red]⚠[/]" if email.is_spam else " "

        sender = email.sender
        if len(sender) > 25:
            sender = sender[:22] + "..."
        sender = sender.replace("[", "\\[")
        subject = (email.subject or "(no subject)").replace("[", "\\[")

        if not email.is_read:
            sender = f"[bold]{sender}[/]"
            subject = f"[bold]{subject}[/]"

        return (
            read_indicator,
            star_indicator,
            spam_indicator,
            sender,
            subject,
            email.category.value,
            self._format_date(email.created_at),
        )

    def _format_date(self, dt: datetime | None) -> str:
        """
        Format a date for display.

        Shows:
            - Time if today
            - Day name if this week
            - Date otherwise
        """
        if not dt:
            return ""

        now = datetime.now()
        if dt.date() == now.date():
            return dt.strftime(self._time_format)
        elif (now.date() - dt.date()).days < 7:
            return dt.strftime("%a")
        else:
            return dt.strftime(self._date_format)

    def get_selected_email(self) -> "Email | None":
        """
        Get the email under the cursor.

        Returns:
            Selected Email or None.
        """
        row_idx = self.cursor_row
        if row_idx is None or not self._emails:
            return None
        try:
            return self._emails[list(self._emails.keys())[row_idx]]
        except (IndexError, KeyError):
            return None

    def refresh_email(self, email: "Email") -> None:
        """
        Redraw the row of an email after its flags or category changed.

        Args:
            email: Updated email.
        """
        columns = list(self.columns.keys())
        for row_key, existing in self._emails.items():
            if existing.id == email.id:
                self._emails[row_key] = email
                for column_key, value in zip(columns, self._row_cells(email)):
                    self.update_cell(row_key, column_key, value)
                break

    def remove_email(self, email: "Email") -> bool:
        """
        Remove an email from the list.

        Returns:
            True if the email was removed, False if not found.
        """
        for row_key, existing in list(self._emails.items()):
            if existing.id == email.id:
                self.remove_row(row_key)
                del self._emails[row_key]
                return True
        return False
