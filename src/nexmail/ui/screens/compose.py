# =============================================================================
# Compose Screen
# =============================================================================
# Writing new mail. The draft is scored as you type, and sending something
# that scores as spam needs an explicit confirmation. There is no mail
# transport: sent mail and drafts go to the local mailbox.
# =============================================================================

import logging

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Grid, Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Input, Label, Static, TextArea

from nexmail.core import Email, EmailContent
from nexmail.spam import ClassificationResult, SpamClassifier
from nexmail.spam.classifier import is_valid_address
from nexmail.storage import Repository
from nexmail.triage import prepare_outgoing
from nexmail.ui.screens.confirm import ConfirmScreen


logger = logging.getLogger(__name__)


def validate_outgoing(to: str, subject: str, body: str) -> str | None:
    """
    Check a composed email before sending.

    Returns:
        An error message, or None if the email can be sent.
    """
    if not to.strip() or not subject.strip() or not body.strip():
        return "Please fill in all fields"
    if not is_valid_address(to.strip()):
        return "Invalid email address"
    return None


def describe_score(result: ClassificationResult) -> str:
    """One-line spam verdict for the compose form."""
    if result.is_spam:
        return f"[bold red]Looks like spam ({result.score}/100)[/]: {result.reasons[0]}"
    if result.reasons:
        return f"[yellow]Spam score {result.score}/100[/]: {result.reasons[0]}"
    return f"[green]Spam score {result.score}/100[/]"


class ComposeScreen(Screen[bool]):
    """
    New message form.

    Dismisses with True when something was stored (sent or draft) so the
    caller knows to reload, False when cancelled.

    Keybindings:
        - Ctrl+S: Save as draft
        - Escape: Cancel
    """

    BINDINGS = [
        Binding("ctrl+s", "save_draft", "Save Draft"),
        Binding("escape", "cancel", "Cancel"),
    ]

    CSS = """
    #compose-form {
        padding: 1 2;
    }

    #compose-fields {
        grid-size: 2;
        grid-columns: 10 1fr;
        grid-rows: 3;
        height: auto;
    }

    #compose-fields Label {
        width: 100%;
        padding: 1 1 0 0;
        text-align: right;
    }

    #compose-body {
        height: 1fr;
        min-height: 8;
        margin-top: 1;
    }

    #compose-score {
        height: 1;
        margin-top: 1;
    }

    #compose-buttons {
        height: auto;
        margin-top: 1;
        align: right middle;
    }

    #compose-buttons Button {
        margin-left: 2;
    }
    """

    def __init__(
        self,
        repo: Repository,
        *,
        sender: str,
        classifier: SpamClassifier | None = None,
        warn_on_send: bool = True,
    ) -> None:
        """
        Args:
            repo: Where sent mail and drafts are stored.
            sender: From address for the new email.
            classifier: Classifier for the spam check.
            warn_on_send: Ask before sending mail that looks like spam.
        """
        super().__init__()
        self._repo = repo
        self._sender = sender
        self._classifier = classifier or SpamClassifier()
        self._warn_on_send = warn_on_send
        self._saving = False

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="compose-form"):
            with Grid(id="compose-fields"):
                yield Label("From")
                yield Input(self._sender, id="compose-from", disabled=True)
                yield Label("To")
                yield Input(placeholder="recipient@example.com", id="compose-to")
                yield Label("Subject")
                yield Input(id="compose-subject")
            yield TextArea(id="compose-body")
            yield Static("", id="compose-score")
            with Horizontal(id="compose-buttons"):
                yield Button("Cancel", id="compose-cancel")
                yield Button("Save Draft", id="compose-draft")
                yield Button("Send", id="compose-send", variant="primary")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#compose-to", Input).focus()
        self._rescore()

    def _content(self) -> EmailContent:
        return EmailContent(
            sender=self._sender,
            to=self.query_one("#compose-to", Input).value.strip(),
            subject=self.query_one("#compose-subject", Input).value,
            body=self.query_one("#compose-body", TextArea).text,
        )

    def _rescore(self) -> None:
        result = self._classifier.evaluate(self._content())
        self.query_one("#compose-score", Static).update(describe_score(result))

    def on_input_changed(self, event: Input.Changed) -> None:
        self._rescore()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self._rescore()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        actions = {
            "compose-send": self.action_send,
            "compose-draft": self.action_save_draft,
            "compose-cancel": self.action_cancel,
        }
        action = actions.get(event.button.id or "")
        if action:
            action()

    def action_send(self) -> None:
        """Validate, check for spam, then store as sent."""
        if self._saving:
            return

        content = self._content()
        error = validate_outgoing(content.to, content.subject, content.body)
        if error:
            self.notify(error, severity="error")
            return

        email, result = prepare_outgoing(content, self._classifier)
        if not (result.is_spam and self._warn_on_send):
            self._store(email, result, sent=True)
            return

        def handle_confirm(confirmed: bool | None) -> None:
            if confirmed:
                self._store(email, result, sent=True)

        self.app.push_screen(
            ConfirmScreen(
                "Possible spam",
                f"This email appears to be spam (score: {result.score}/100). "
                "Do you still want to send it?",
                confirm_label="Send anyway",
            ),
            handle_confirm,
        )

    def action_save_draft(self) -> None:
        if self._saving:
            return
        email, result = prepare_outgoing(self._content(), self._classifier, draft=True)
        self._store(email, result, sent=False)

    @work(exclusive=True)
    async def _store(self, email: Email, result: ClassificationResult, *, sent: bool) -> None:
        self._saving = True
        try:
            await self._repo.save_email(email)
        except Exception as e:
            logger.error(f"Failed to store composed email: {e}")
            self.notify(f"Could not save: {e}", severity="error")
            return
        finally:
            self._saving = False

        if sent:
            logger.info(f"Sent email to {email.to} (score={result.score})")
            self.notify(f"Email sent to {email.to}", timeout=3)
        else:
            self.notify("Draft saved", timeout=3)
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
