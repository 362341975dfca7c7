# =============================================================================
# UI Screens
# =============================================================================
# Full-screen views and dialogs.
#
#   - MainScreen: Mailbox views, message list and preview with analysis
#   - ComposeScreen: Writing new mail, with a pre-send spam check
#   - SearchScreen, ConfirmScreen: Modal dialogs
# =============================================================================

from nexmail.ui.screens.compose import ComposeScreen
from nexmail.ui.screens.confirm import ConfirmScreen
from nexmail.ui.screens.main import MainScreen
from nexmail.ui.screens.search import SearchRequest, SearchScreen

__all__ = ["ComposeScreen", "ConfirmScreen", "MainScreen", "SearchRequest", "SearchScreen"]
