# =============================================================================
# Main Screen
# =============================================================================
# Views with their counts on the left, the messages of the selected view on
# the right, and below them the open message together with its spam score,
# the reasons behind it and a one-line summary.
# =============================================================================

import logging
from pathlib import Path

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from nexmail.config import Config
from nexmail.core import Email
from nexmail.spam import SpamClassifier
from nexmail.storage import Database, Repository, View
from nexmail.triage import retriage
from nexmail.ui.screens.compose import ComposeScreen
from nexmail.ui.screens.confirm import ConfirmScreen
from nexmail.ui.screens.search import SearchRequest, SearchScreen
from nexmail.ui.widgets.message_list import MessageList
from nexmail.ui.widgets.message_preview import MessagePreview
from nexmail.ui.widgets.view_tree import ViewTree


logger = logging.getLogger(__name__)


class MainScreen(Screen):
    """
    Mailbox browser. Owns the database connection for the lifetime of the UI.

    Keybindings:
        - j/k or arrows: Navigate message list
        - Enter: Open message (marks it read)
        - c: Compose
        - d: Delete
        - J: Mark as spam
        - !: Mark as not spam
        - *: Toggle star
        - u: Mark unread
        - t: Re-run spam analysis
        - /: Search, Escape: clear search
    """

    BINDINGS = [
        Binding("j", "cursor_down", "Next", show=False),
        Binding("k", "cursor_up", "Previous", show=False),
        Binding("enter", "select_message", "View", show=True),
        Binding("c", "compose", "Compose"),
        Binding("d", "delete", "Delete"),
        Binding("delete", "delete", "Delete", show=False),
        Binding("J", "mark_spam", "Spam"),
        Binding("!", "mark_not_spam", "Not Spam", show=False),
        Binding("*", "toggle_star", "Star"),
        Binding("u", "mark_unread", "Unread", show=False),
        Binding("t", "retriage", "Re-check", show=False),
        Binding("tab", "focus_next_pane", "Next Pane", show=False),
        Binding("/", "search", "Search"),
        Binding("escape", "clear_search", "Clear", show=False),
    ]

    CSS = """
    #main-container {
        height: 1fr;
    }

    #sidebar {
        width: 26;
        min-width: 20;
        max-width: 36;
        background: $surface-darken-1;
        border-right: solid $primary;
    }

    #sidebar-header {
        background: $primary;
        color: $text;
        text-align: center;
        height: 3;
        padding: 1;
    }

    #view-tree {
        height: 1fr;
    }

    #content {
        width: 1fr;
    }

    #message-list {
        height: 50%;
        border-bottom: solid $primary;
    }

    #message-preview {
        height: 50%;
    }

    #status-line {
        height: 1;
        background: $surface-darken-2;
        color: $text-muted;
        padding: 0 1;
    }
    """

    def __init__(self, config: Config, *, db_path: Path | None = None) -> None:
        """
        Args:
            config: Application configuration.
            db_path: Mailbox database. Defaults to the XDG data location.
        """
        super().__init__()
        self._config = config
        self._db_path = db_path
        self._db: Database | None = None
        self._repo: Repository | None = None
        self._classifier = SpamClassifier(threshold=config.spam.threshold)
        self._current_view = View.INBOX

        self._search_query = ""

    def compose(self) -> ComposeResult:
        """Sidebar of views beside the list, preview under the list."""
        yield Header()

        with Horizontal(id="main-container"):
            with Vertical(id="sidebar"):
                yield Static("Mailbox", id="sidebar-header")
                yield ViewTree("Mailbox", id="view-tree")

            with Vertical(id="content"):
                yield MessageList(
                    id="message-list",
                    time_format=self._config.ui.time_format,
                    date_format=self._config.ui.date_format,
                )
                yield MessagePreview(
                    id="message-preview",
                    can_focus=False,
                    show_summary=self._config.ui.show_summary,
                )

        yield Static("Ready", id="status-line")
        yield Footer()

    async def on_mount(self) -> None:
        """Open the mailbox and show the inbox."""
        self.update_status("Opening mailbox...")

        self._db = Database(self._db_path)
        await self._db.connect()
        self._repo = Repository(self._db)

        seeded = await self._repo.seed_samples(
            self._config.general.user_email,
            self._classifier,
            flag_spam=self._config.spam.enabled,
        )
        if seeded:
            self.notify(f"Added {seeded} sample emails")

        await self._select_view(View.INBOX)
        self.query_one("#message-list", MessageList).focus()

    async def on_unmount(self) -> None:
        if self._db:
            await self._db.close()

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    async def _select_view(self, view: View) -> None:
        """
        Show the emails of a view (filtered by the active search, if any).

        Args:
            view: View to show.
        """
        if not self._repo:
            return
        self._current_view = view

        preview = self.query_one("#message-preview", MessagePreview)
        await preview.clear()

        emails = await self._repo.get_emails(view, search=self._search_query)
        message_list = self.query_one("#message-list", MessageList)
        await message_list.load_emails(emails)
        await self._refresh_counts()

        count = len(emails)
        if self._search_query:
            self.update_status(
                f"{view.value}: {count} message{'s' if count != 1 else ''} "
                f"matching '{self._search_query}' (Esc to clear)"
            )
        else:
            unread = sum(1 for e in emails if not e.is_read)
            self.update_status(f"{view.value}: {count} messages ({unread} unread)")

    async def _refresh_counts(self) -> None:
        if self._repo:
            self.query_one("#view-tree", ViewTree).load_counts(await self._repo.count_by_view())

    async def _show(self, email: Email) -> None:
        preview = self.query_one("#message-preview", MessagePreview)
        await preview.show_email(email, self._classifier.evaluate(email.content))

    def _selected_email(self) -> Email | None:
        return self.query_one("#message-list", MessageList).get_selected_email()

    def update_status(self, text: str) -> None:
        self.query_one("#status-line", Static).update(text)

    # -------------------------------------------------------------------------
    # Event Handlers
    # -------------------------------------------------------------------------

    async def on_tree_node_selected(self, event: ViewTree.NodeSelected) -> None:
        """Switch views from the sidebar."""
        if isinstance(event.node.data, View):
            await self._select_view(event.node.data)

    async def on_data_table_row_selected(self, event: MessageList.RowSelected) -> None:
        await self.action_select_message()

    async def on_data_table_row_highlighted(self, event: MessageList.RowHighlighted) -> None:
        # Previewing on highlight leaves the read flag alone
        email = self._selected_email()
        if email:
            await self._show(email)

    # -------------------------------------------------------------------------
    # Action Handlers
    # -------------------------------------------------------------------------

    def action_cursor_down(self) -> None:
        self.query_one("#message-list", MessageList).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one("#message-list", MessageList).action_cursor_up()

    async def action_select_message(self) -> None:
        """Preview the current message and mark it read."""
        email = self._selected_email()
        if not email or not self._repo or email.id is None:
            return

        await self._show(email)
        if not email.is_read:
            email.mark_read()
            await self._repo.update_flags(email.id, email.flags)
            self.query_one("#message-list", MessageList).refresh_email(email)

    def action_compose(self) -> None:
        if not self._repo:
            return

        def handle_result(stored: bool | None) -> None:
            if stored:
                self._reload()

        self.app.push_screen(
            ComposeScreen(
                self._repo,
                sender=self._config.general.user_email,
                classifier=self._classifier,
                warn_on_send=self._config.spam.warn_on_send,
            ),
            handle_result,
        )

    @work(exclusive=True, group="reload")
    async def _reload(self) -> None:
        await self._select_view(self._current_view)

    def action_delete(self) -> None:
        """Delete the selected message (after confirmation if configured)."""
        email = self._selected_email()
        if not email:
            self.notify("No message selected", severity="warning")
            return

        if not self._config.ui.confirm_delete:
            self._do_delete(email)
            return

        def handle_confirm(confirmed: bool | None) -> None:
            if confirmed:
                self._do_delete(email)

        subject = (email.subject or "(no subject)").replace("[", "\\[")
        self.app.push_screen(
            ConfirmScreen("Delete email", f"Permanently delete '{subject}'?", confirm_label="Delete"),
            handle_confirm,
        )

    @work(exclusive=True, group="delete")
    async def _do_delete(self, email: Email) -> None:
        if not self._repo or email.id is None:
            return
        try:
            await self._repo.delete_email(email.id)
        except Exception as e:
            logger.error(f"Delete failed for email {email.id}: {e}")
            self.notify(f"Delete failed: {e}", severity="error")
            return

        message_list = self.query_one("#message-list", MessageList)
        message_list.remove_email(email)
        preview = self.query_one("#message-preview", MessagePreview)
        next_email = message_list.get_selected_email()
        if next_email:
            await self._show(next_email)
        else:
            await preview.clear()
        await self._refresh_counts()
        self.notify("Email deleted")

    async def action_mark_spam(self) -> None:
        """Flag the selected message as spam."""
        email = self._selected_email()
        if not email or not self._repo:
            self.notify("No message selected", severity="warning")
            return
        if email.is_spam:
            return

        email.mark_spam()
        await self._repo.update_classification(email)
        await self._after_reclassify(email)
        self.notify("Marked as spam")

    async def action_mark_not_spam(self) -> None:
        """Clear the spam flag on the selected message."""
        email = self._selected_email()
        if not email or not self._repo:
            self.notify("No message selected", severity="warning")
            return
        if not email.is_spam:
            return

        email.mark_not_spam()
        await self._repo.update_classification(email)
        await self._after_reclassify(email)
        self.notify("Marked as not spam")

    async def action_retriage(self) -> None:
        """Re-run the spam analysis on the selected message."""
        email = self._selected_email()
        if not email or not self._repo:
            return

        result = retriage(email, self._classifier, flag_spam=self._config.spam.enabled)
        await self._repo.update_classification(email)
        await self._after_reclassify(email)
        self.notify(f"Score {result.score}/100, category {email.category.value}")

    async def _after_reclassify(self, email: Email) -> None:
        self.query_one("#message-list", MessageList).refresh_email(email)
        await self._show(email)
        await self._refresh_counts()

    async def action_toggle_star(self) -> None:
        email = self._selected_email()
        if not email or not self._repo or email.id is None:
            return

        email.toggle_starred()
        await self._repo.update_flags(email.id, email.flags)
        self.query_one("#message-list", MessageList).refresh_email(email)
        await self._refresh_counts()
        self.notify("Starred" if email.is_starred else "Unstarred")

    async def action_mark_unread(self) -> None:
        """Mark the selected message as unread."""
        email = self._selected_email()
        if not email or not self._repo or email.id is None or not email.is_read:
            return

        email.mark_unread()
        await self._repo.update_flags(email.id, email.flags)
        self.query_one("#message-list", MessageList).refresh_email(email)
        self.notify("Marked as unread")

    def action_search(self) -> None:
        def apply(request: SearchRequest | None) -> None:
            if request:
                self._search_query = request.query
                if request.all_mail:
                    self._current_view = View.ALL
                self._reload()

        self.app.push_screen(
            SearchScreen(self._current_view.value, self._search_query),
            apply,
        )

    async def action_clear_search(self) -> None:
        """Clear search results and return to the plain view."""
        if not self._search_query:
            return
        self._search_query = ""
        await self._select_view(self._current_view)
        self.notify("Search cleared")

    def action_focus_next_pane(self) -> None:
        """Move focus between the sidebar and the message list."""
        view_tree = self.query_one("#view-tree", ViewTree)
        message_list = self.query_one("#message-list", MessageList)
        if self.focused == view_tree:
            message_list.focus()
        else:
            view_tree.focus()
