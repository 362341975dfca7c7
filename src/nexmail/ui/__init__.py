# =============================================================================
# UI Module
# =============================================================================
# Textual-based user interface for NexMail.
#
# Structure:
#   - screens/: Full-screen views and modal dialogs
#   - widgets/: Reusable UI components (view tree, message list, preview)
# =============================================================================

from nexmail.ui.screens.compose import ComposeScreen
from nexmail.ui.screens.main import MainScreen
from nexmail.ui.widgets.message_list import MessageList
from nexmail.ui.widgets.message_preview import MessagePreview
from nexmail.ui.widgets.view_tree import ViewTree

__all__ = [
    "ComposeScreen",
    "MainScreen",
    "MessageList",
    "MessagePreview",
    "ViewTree",
]
