# =============================================================================
# Message Preview Widget
# =============================================================================
# Displays the selected email together with its analysis:
#   - Headers (from, to, subject, date)
#   - Spam badge and score, with the reasons behind it
#   - The extractive summary
#   - The body
# =============================================================================

from typing import TYPE_CHECKING

from textual.containers import ScrollableContainer
from textual.widgets import Static

if TYPE_CHECKING:
    from nexmail.core import Email
    from nexmail.spam import ClassificationResult


def escape(text: str) -> str:
    """Escape Rich markup in user content."""
    if not text:
        return ""
    return text.replace("[", "\\[")


def render_analysis(email: "Email", result: "ClassificationResult") -> str:
    """
    Build the analysis block shown under the headers.

    A message the user (or triage) flagged as spam gets a SPAM badge. A
    message that is not flagged but scores as spam now is shown as
    suspicious, with its score.
    """
    if email.is_spam:
        badge = "[bold white on red] SPAM [/]"
    elif result.is_spam:
        badge = f"[bold yellow]Suspicious (Score: {result.score})[/]"
    else:
        badge = "[green]Looks legitimate[/]"

    lines = [f"{badge}  Spam score: {result.score}/100  Category: {email.category.value}"]
    for reason in result.reasons:
        lines.append(f"  • {escape(reason)}")
    return "\n".join(lines)


class MessagePreview(ScrollableContainer):
    """
    A widget for displaying an email and its analysis.

    Usage:
        >>> preview = MessagePreview()
        >>> await preview.show_email(email, result)
    """

    DEFAULT_CSS = """
    MessagePreview {
        padding: 0 1;
    }

    MessagePreview > #preview-header {
        height: auto;
        margin-bottom: 1;
    }

    MessagePreview > #preview-analysis {
        height: auto;
        margin-bottom: 1;
    }

    MessagePreview > #preview-summary {
        height: auto;
        margin-bottom: 1;
        color: $text-muted;
    }

    MessagePreview > #preview-body {
        height: auto;
    }
    """

    def __init__(self, *, show_summary: bool = True, **kwargs) -> None:
        """
        Initialize the message preview.

        Args:
            show_summary: Show the summary above the body.
            **kwargs: Additional arguments passed to ScrollableContainer.
        """
        super().__init__(**kwargs)
        self._show_summary = show_summary

    def compose(self):
        """Compose the widget."""
        yield Static("Select a message to preview", id="preview-header")
        yield Static("", id="preview-analysis")
        yield Static("", id="preview-summary")
        yield Static("", id="preview-body")

    async def show_email(self, email: "Email", result: "ClassificationResult") -> None:
        """
        Display an email.

        Args:
            email: Email to display.
            result: Current classification of the email.
        """
        header = "\n".join([
            f"[bold]From:[/] {escape(email.sender)}",
            f"[bold]To:[/] {escape(email.to)}",
            f"[bold]Subject:[/] {escape(email.subject)}",
            f"[bold]Date:[/] {email.created_at:%Y-%m-%d %H:%M}",
            "─" * 50,
        ])
        self.query_one("#preview-header", Static).update(header)
        self.query_one("#preview-analysis", Static).update(render_analysis(email, result))

        summary = ""
        if self._show_summary and email.summary:
            summary = f"[bold]Summary:[/] {escape(email.summary)}"
        self.query_one("#preview-summary", Static).update(summary)

        body = escape(email.body) if email.body else "[dim]No content[/]"
        self.query_one("#preview-body", Static).update(body)

        self.scroll_home()

    async def clear(self) -> None:
        """Clear the preview."""
        self.query_one("#preview-header", Static).update("Select a message to preview")
        for widget_id in ("preview-analysis", "preview-summary", "preview-body"):
            self.query_one(f"#{widget_id}", Static).update("")

