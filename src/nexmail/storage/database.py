# =============================================================================
# Mailbox Database
# =============================================================================
# One SQLite file holds the whole local mailbox:
#
#   schema_version   single row, the layout version of the file
#   emails           received, sent and draft mail with triage results
#
# aiosqlite keeps queries off the Textual event loop. WAL journaling lets the
# CLI import into a mailbox the TUI has open.
# =============================================================================

import logging
from pathlib import Path

import aiosqlite

from nexmail.config import Config


logger = logging.getLogger(__name__)

# Bump together with _SCHEMA when the table layout changes
SCHEMA_VERSION = 1

_SCHEMA = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY
);

CREATE TABLE IF NOT EXISTS emails (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    mailbox TEXT NOT NULL DEFAULT 'inbox',      -- inbox / sent / drafts
    sender TEXT NOT NULL DEFAULT '',
    recipient TEXT NOT NULL DEFAULT '',
    subject TEXT NOT NULL DEFAULT '',
    body TEXT NOT NULL DEFAULT '',
    category TEXT NOT NULL DEFAULT 'inbox',     -- Category value
    spam_score INTEGER NOT NULL DEFAULT 0,      -- 0-100
    summary TEXT NOT NULL DEFAULT '',
    flags INTEGER NOT NULL DEFAULT 0,           -- EmailFlags bits
    created_at TEXT NOT NULL,                   -- ISO 8601, local time
    updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_emails_mailbox ON emails(mailbox);
CREATE INDEX IF NOT EXISTS idx_emails_created ON emails(created_at DESC);
"""


class Database:
    """
    Owns the connection to the mailbox file.

    Either open and close it explicitly (the TUI keeps it open for the
    lifetime of the main screen) or use it as an async context manager:

        >>> async with Database(path) as db:
        ...     repo = Repository(db)

    Attributes:
        db_path: Location of the SQLite file.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        """
        Args:
            db_path: SQLite file to use. Defaults to nexmail.db in the XDG
                     data directory.
        """
        self.db_path = db_path or Config.database_path()
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open (creating if needed) the mailbox file and bring its schema up to date."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        logger.debug(f"Opening database {self.db_path}")
        self._connection = await aiosqlite.connect(self.db_path)
        await self._connection.execute("PRAGMA journal_mode = WAL")

        version = await self.schema_version()
        if version < SCHEMA_VERSION:
            logger.info(f"Creating mailbox schema v{SCHEMA_VERSION} (was v{version})")
            await self._create_schema()

    async def close(self) -> None:
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def __aenter__(self) -> "Database":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    @property
    def conn(self) -> aiosqlite.Connection:
        """
        The open connection.

        Raises:
            RuntimeError: If connect() has not been called.
        """
        if self._connection is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._connection

    async def schema_version(self) -> int:
        """Layout version stored in the file, 0 for a new file."""
        try:
            async with self.conn.execute("SELECT version FROM schema_version") as cursor:
                row = await cursor.fetchone()
        except aiosqlite.OperationalError:
            return 0
        return row[0] if row else 0

    async def _create_schema(self) -> None:
        await self.conn.executescript(_SCHEMA)
        await self.conn.execute("DELETE FROM schema_version")
        await self.conn.execute(
            "INSERT INTO schema_version (version) VALUES (?)", (SCHEMA_VERSION,)
        )
        await self.conn.commit()
