# =============================================================================
# Search Dialog
# =============================================================================
# Asks for a search term and its scope. The main screen does the filtering:
# a message matches when the term appears in its subject, sender or body,
# ignoring case.
# =============================================================================

from dataclasses import dataclass

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Checkbox, Input, Label


@dataclass(frozen=True)
class SearchRequest:
    """What the user asked for: the term and whether to look beyond the current view."""
    query: str
    all_mail: bool = False


class SearchScreen(ModalScreen[SearchRequest | None]):
    """
    Search prompt. Dismisses with a SearchRequest, or None when cancelled.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    CSS = """
    SearchScreen {
        align: center middle;
    }

    #search-dialog {
        width: 64;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $accent;
    }

    #search-dialog Label {
        width: 100%;
        margin-bottom: 1;
    }

    #search-heading {
        text-style: bold;
        text-align: center;
    }

    #search-help {
        color: $text-muted;
    }

    #search-dialog Checkbox {
        margin-bottom: 1;
    }

    #search-actions {
        height: auto;
        align: center middle;
    }

    #search-actions Button {
        margin: 0 1;
    }
    """

    def __init__(self, view_name: str = "current view", initial: str = "") -> None:
        """
        Args:
            view_name: Label of the view being searched.
            initial: Text to pre-fill, usually the active search.
        """
        super().__init__()
        self._view_name = view_name
        self._initial = initial

    def compose(self) -> ComposeResult:
        with Vertical(id="search-dialog"):
            yield Label(f"Search {self._view_name}", id="search-heading")
            yield Input(self._initial, placeholder="Words to look for", id="search-query")
            yield Label("Matches subject, sender and body, ignoring case", id="search-help")
            yield Checkbox("Search all mail", id="search-all-mail")
            with Horizontal(id="search-actions"):
                yield Button("Search", id="search-submit", variant="primary")
                yield Button("Cancel", id="search-cancel")

    def on_mount(self) -> None:
        self.query_one("#search-query", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "search-submit":
            self._submit()
        else:
            self.action_cancel()

    def _submit(self) -> None:
        query = self.query_one("#search-query", Input).value.strip()
        if not query:
            self.notify("Type something to search for", severity="warning")
            return
        all_mail = self.query_one("#search-all-mail", Checkbox).value
        self.dismiss(SearchRequest(query, all_mail))

    def action_cancel(self) -> None:
        self.dismiss(None)
