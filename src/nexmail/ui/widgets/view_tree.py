# =============================================================================
# View Tree Widget
# =============================================================================
# Sidebar listing the mailbox views (Inbox, Promotions, Spam, Sent, ...)
# with an email count next to each.
# =============================================================================

from textual.widgets import Tree
from textual.widgets.tree import TreeNode

from nexmail.storage import View


class ViewTree(Tree):
    """
    A tree widget listing mailbox views.

    Usage:
        >>> tree = ViewTree("Mailbox")
        >>> tree.load_counts(await repo.count_by_view())
    """

    # Note: Avoid emojis with variation selectors as they cause terminal width issues
    VIEW_ICONS = {
        View.ALL: "📬",
        View.INBOX: "📥",
        View.PROMOTION: "🏷",
        View.SOCIAL: "👥",
        View.UPDATES: "🔔",
        View.SPAM: "⛔",
        View.STARRED: "★",
        View.SENT: "📤",
        View.DRAFTS: "📝",
    }

    def __init__(self, label: str = "Mailbox", **kwargs) -> None:
        super().__init__(label, **kwargs)
        self.show_root = False
        self._nodes: dict[View, TreeNode] = {}

    def on_mount(self) -> None:
        """Add one leaf per view."""
        for view in View:
            self._nodes[view] = self.root.add_leaf(self._label(view, 0), data=view)
        self.root.expand()

    def load_counts(self, counts: dict[View, int]) -> None:
        """
        Update the count shown next to each view.

        Args:
            counts: Email count per view.
        """
        for view, node in self._nodes.items():
            node.set_label(self._label(view, counts.get(view, 0)))

    def _label(self, view: View, count: int) -> str:
        icon = self.VIEW_ICONS.get(view, "📁")
        if count > 0:
            return f"{icon} {view.value} ({count})"
        return f"{icon} {view.value}"

