# =============================================================================
# NexMail Main Application
# =============================================================================
# This is the main Textual application class and the command-line entry point.
#
# The application consists of:
#   - Screens: Full-window views (main, compose) and modal dialogs
#   - Widgets: Reusable UI components (view tree, message list, preview)
#   - Bindings: Keyboard shortcuts
#
# The command line also offers two non-interactive commands:
#   - check: Analyze a single email given on the command line
#   - import: Triage .eml files into the local mailbox
# =============================================================================

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from textual.app import App
from textual.binding import Binding

from nexmail import __version__, __app_name__
from nexmail.config import Config, ConfigError, print_paths, setup_logging
from nexmail.core import EmailContent
from nexmail.ingest import EmailImportError, load_eml
from nexmail.spam import SpamClassifier, categorize, summarize
from nexmail.storage import Database, Repository
from nexmail.triage import triage
from nexmail.ui.screens.main import MainScreen


logger = logging.getLogger(__name__)


class NexMailApp(App):
    """
    The main NexMail application.

    Attributes:
        config: The loaded application configuration.
        TITLE: Window title shown in terminal.
        SUB_TITLE: Subtitle shown in header.
        BINDINGS: Global keyboard shortcuts.
    """

    # Application metadata
    TITLE = "NexMail"
    SUB_TITLE = "Spam detection and smart categorization"

    BINDINGS = [
        Binding("q", "quit", "Quit", priority=True),
        Binding("?", "show_help", "Help"),
    ]

    def __init__(
        self,
        config: Config | None = None,
        *,
        config_error: str | None = None,
        db_path: Path | None = None,
    ) -> None:
        """
        Initialize the NexMail application.

        Args:
            config: Settings to use. Read from the XDG config file if None.
            config_error: Why the config file was rejected, shown once the
                          UI is up.
            db_path: Mailbox database. Defaults to the XDG data location.
        """
        super().__init__()

        self._config_error = config_error
        self._db_path = db_path

        if config is None:
            try:
                config = Config.load()
            except ConfigError as e:
                config = Config()
                self._config_error = str(e)
        self.config = config

    async def on_mount(self) -> None:
        """Report a rejected config file, then open the mailbox."""
        if self._config_error:
            self.notify(
                f"Config error: {self._config_error}",
                severity="error",
                timeout=10,
            )

        await self.push_screen(MainScreen(self.config, db_path=self._db_path))

    # -------------------------------------------------------------------------
    # Action Handlers
    # -------------------------------------------------------------------------

    def action_quit(self) -> None:
        self.exit()

    def action_show_help(self) -> None:
        """List the keybindings."""
        self.notify(
            "Keybindings: j/k=navigate, Enter=view, c=compose, d=delete, "
            "J=spam, !=not spam, *=star, u=unread, t=re-check, /=search, q=quit",
            timeout=10,
        )


# =============================================================================
# Commands
# =============================================================================

def run_check(args: argparse.Namespace, config: Config) -> int:
    """
    Analyze one email and print the verdict.

    Returns:
        Exit code: 0 for legitimate mail, 2 for spam.
    """
    content = EmailContent(sender=args.sender, subject=args.subject, body=args.body)
    classifier = SpamClassifier(threshold=config.spam.threshold)
    result = classifier.evaluate(content)
    category = categorize(content, classifier)
    summary = summarize(content)

    if args.json:
        data = result.to_dict()
        data["category"] = category.value
        data["summary"] = summary
        print(json.dumps(data, indent=2))
    else:
        verdict = "SPAM" if result.is_spam else "not spam"
        print(f"Score:    {result.score}/100 ({verdict})")
        print(f"Category: {category.value}")
        print(f"Summary:  {summary}")
        if result.reasons:
            print("Reasons:")
            for reason in result.reasons:
                print(f"  - {reason}")

    return 2 if result.is_spam else 0


async def import_files(paths: list[Path], config: Config, db_path: Path | None = None) -> int:
    """
    Triage .eml files into the mailbox.

    Args:
        paths: Files to import.
        config: Application configuration.
        db_path: Mailbox database. Defaults to the XDG data location.

    Returns:
        Number of files that could not be imported.
    """
    classifier = SpamClassifier(threshold=config.spam.threshold)
    failures = 0

    async with Database(db_path) as db:
        repo = Repository(db)
        for path in paths:
            try:
                imported = load_eml(path)
            except EmailImportError as e:
                logger.warning(str(e))
                print(f"error: {e}", file=sys.stderr)
                failures += 1
                continue

            email = triage(
                imported.content,
                classifier,
                received_at=imported.date,
                flag_spam=config.spam.enabled,
            )
            await repo.save_email(email)

            marker = "spam" if email.is_spam else email.category.value
            print(f"{path}: {marker} (score {email.spam_score})")

    return failures


# =============================================================================
# CLI Entry Point
# =============================================================================

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse the command line (sys.argv when argv is None)."""
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="NexMail: A terminal mailbox with spam detection and smart categorization",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--paths",
        action="store_true",
        help="Show where config, mailbox and log are kept, then exit",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (default: XDG config location)",
    )

    parser.add_argument(
        "--db",
        type=Path,
        help="Path to mailbox database (default: XDG data location)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log at DEBUG level",
    )

    subparsers = parser.add_subparsers(dest="command")

    check = subparsers.add_parser("check", help="Analyze a single email and exit")
    check.add_argument("--from", dest="sender", default="", help="Sender address")
    check.add_argument("--subject", default="", help="Subject line")
    check.add_argument("--body", default="", help="Message body")
    check.add_argument("--json", action="store_true", help="Print the result as JSON")

    import_cmd = subparsers.add_parser("import", help="Import .eml files into the mailbox")
    import_cmd.add_argument("files", nargs="+", type=Path, help="Files to import")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """
    Entry point of the nexmail command.

    Without a subcommand this starts the TUI; a broken config file is then
    reported inside the UI and defaults are used. The check and import
    subcommands fail instead.

    Returns:
        Process exit status.
    """
    args = parse_args(argv)

    # Handle --paths flag
    if args.paths:
        print_paths()
        return 0

    setup_logging(debug=args.debug)
    logger.info(f"Starting {__app_name__} {__version__}")

    config_error = None
    try:
        config = Config.load(args.config)
    except ConfigError as e:
        if args.command:
            print(f"error: {e}", file=sys.stderr)
            return 1
        config = Config()
        config_error = str(e)

    if args.command == "check":
        return run_check(args, config)

    if args.command == "import":
        failures = asyncio.run(import_files(args.files, config, args.db))
        return 1 if failures else 0

    app = NexMailApp(config=config, config_error=config_error, db_path=args.db)
    app.run()

    return 0


if __name__ == "__main__":
    sys.exit(main())
