# =============================================================================
# Storage Module
# =============================================================================
# Handles persistent storage of the local mailbox using SQLite.
#
# Provides:
#   - Database initialization and schema versioning
#   - CRUD operations and mailbox views for stored email
#   - Async operations via aiosqlite
#
# The database is stored in the XDG data directory (~/.local/share/nexmail/).
# =============================================================================

from nexmail.storage.database import Database
from nexmail.storage.repository import Repository, View

__all__ = ["Database", "Repository", "View"]
