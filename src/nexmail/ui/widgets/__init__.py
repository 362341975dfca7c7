# =============================================================================
# UI Widgets
# =============================================================================
# Reusable UI components for NexMail:
#   - ViewTree: Sidebar of mailbox views with counts
#   - MessageList: Table of emails
#   - MessagePreview: Email display with spam analysis and summary
# =============================================================================

from nexmail.ui.widgets.message_list import MessageList
from nexmail.ui.widgets.message_preview import MessagePreview
from nexmail.ui.widgets.view_tree import ViewTree

__all__ = ["MessageList", "MessagePreview", "ViewTree"]
