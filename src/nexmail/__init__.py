# =============================================================================
# NexMail: A Terminal Mailbox with Spam Detection
# =============================================================================
#
# NexMail keeps a local mailbox and analyzes every message that enters it.
#
# Features:
#   - Heuristic spam scoring (0-100) with human-readable reasons
#   - Smart categories: inbox, promotions, social, updates, spam
#   - Short extractive summaries of each message
#   - Spam check before sending composed mail
#   - Import of .eml files, local SQLite storage
#   - XDG Base Directory compliant
#
# =============================================================================

__version__ = "0.1.0"
__app_name__ = "nexmail"

# Main entry point - this is what gets called by the 'nexmail' command
from nexmail.app import main

__all__ = ["main", "__version__", "__app_name__"]
