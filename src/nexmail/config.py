# =============================================================================
# Configuration
# =============================================================================
# Where NexMail keeps its files, what config.toml may contain, and where the
# log goes.
#
# Directories follow the XDG base directory layout:
#   config   $XDG_CONFIG_HOME/nexmail   (~/.config/nexmail)     config.toml
#   data     $XDG_DATA_HOME/nexmail     (~/.local/share/nexmail) nexmail.db
#   state    $XDG_STATE_HOME/nexmail    (~/.local/state/nexmail) nexmail.log
#
# Example config.toml:
#
#   [general]
#   user_email = "me@example.org"
#
#   [spam]
#   threshold = 60
#   warn_on_send = false
#
#   [ui]
#   time_format = "%I:%M %p"
# =============================================================================

import logging
import os
import tomllib  # Built into Python 3.11+
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import tomli_w  # For writing TOML (tomllib is read-only)


logger = logging.getLogger(__name__)

APP_NAME = "nexmail"


# =============================================================================
# Directories
# =============================================================================

def _xdg_home(variable: str, *fallback: str) -> Path:
    """$variable/nexmail, or ~/<fallback>/nexmail when the variable is unset."""
    root = os.environ.get(variable)
    base = Path(root) if root else Path.home().joinpath(*fallback)
    return base / APP_NAME


def get_xdg_config_home() -> Path:
    """Directory holding config.toml."""
    return _xdg_home("XDG_CONFIG_HOME", ".config")


def get_xdg_data_home() -> Path:
    """Directory holding the mailbox database."""
    return _xdg_home("XDG_DATA_HOME", ".local", "share")


def get_xdg_state_home() -> Path:
    """Directory holding the log file."""
    return _xdg_home("XDG_STATE_HOME", ".local", "state")


def ensure_directories() -> None:
    for directory in (get_xdg_config_home(), get_xdg_data_home(), get_xdg_state_home()):
        directory.mkdir(parents=True, exist_ok=True)


# =============================================================================
# Sections
# =============================================================================

@dataclass
class GeneralConfig:
    """
    [general]

    Attributes:
        user_email: From address of composed mail, To address of the samples.
        display_name: Name shown next to the address.
    """
    user_email: str = "user@example.com"
    display_name: str = ""


@dataclass
class SpamConfig:
    """
    [spam]

    Attributes:
        enabled: Flag spam verdicts at ingest time. When off, incoming mail
                 is still scored but stays in its regular views.
        threshold: Score (0-100) at or above which mail is spam.
        warn_on_send: Ask for confirmation before sending mail that
                      itself looks like spam.
    """
    enabled: bool = True
    threshold: int = 70
    warn_on_send: bool = True


@dataclass
class UIConfig:
    """
    [ui]

    Attributes:
        date_format: strftime format for mail older than a week.
        time_format: strftime format for today's mail.
        confirm_delete: Ask before deleting.
        show_summary: Show the summary in the preview pane.
    """
    date_format: str = "%Y-%m-%d"
    time_format: str = "%H:%M"
    confirm_delete: bool = True
    show_summary: bool = True


@dataclass
class Config:
    """
    All settings, one attribute per config.toml table.

    Usage:
        >>> config = Config.load()
        >>> config.spam.threshold
        70
    """
    general: GeneralConfig = field(default_factory=GeneralConfig)
    spam: SpamConfig = field(default_factory=SpamConfig)
    ui: UIConfig = field(default_factory=UIConfig)

    @staticmethod
    def config_file_path() -> Path:
        return get_xdg_config_home() / "config.toml"

    @staticmethod
    def database_path() -> Path:
        return get_xdg_data_home() / "nexmail.db"

    @staticmethod
    def log_file_path() -> Path:
        return get_xdg_state_home() / "nexmail.log"

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """
        Read config.toml. A missing file means all defaults.

        Args:
            path: File to read instead of the XDG location.

        Raises:
            ConfigError: If the file can't be read, isn't valid TOML, or
                         holds a value of the wrong type or range.
        """
        if path is None:
            ensure_directories()
            path = cls.config_file_path()

        if not path.exists():
            return cls()

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e

        config = cls(
            general=_load_section(GeneralConfig, "general", data),
            spam=_load_section(SpamConfig, "spam", data),
            ui=_load_section(UIConfig, "ui", data),
        )
        if not 0 <= config.spam.threshold <= 100:
            raise ConfigError(f"spam.threshold must be between 0 and 100, got {config.spam.threshold}")
        return config

    def save(self, path: Path | None = None) -> None:
        """Write all settings (defaults included) to config.toml."""
        if path is None:
            ensure_directories()
            path = self.config_file_path()
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            name: {f.name: getattr(section, f.name) for f in fields(section)}
            for name, section in (("general", self.general), ("spam", self.spam), ("ui", self.ui))
        }
        with open(path, "wb") as f:
            tomli_w.dump(data, f)


def _load_section(section_cls: type, name: str, data: dict[str, Any]) -> Any:
    """Build one section from its TOML table, keeping defaults for absent keys."""
    table = data.get(name, {})
    if not isinstance(table, dict):
        raise ConfigError(f"[{name}] must be a table")

    section = section_cls()
    for f in fields(section):
        if f.name not in table:
            continue
        value = table[f.name]
        expected = type(getattr(section, f.name))
        # bool is an int subclass, so compare exact types
        if type(value) is not expected:
            raise ConfigError(
                f"{name}.{f.name} must be a {expected.__name__}, got {value!r}"
            )
        setattr(section, f.name, value)

    unknown = set(table) - {f.name for f in fields(section)}
    for key in sorted(unknown):
        logger.warning(f"Ignoring unknown config key {name}.{key}")
    return section


class ConfigError(Exception):
    """config.toml could not be used."""
    pass


# =============================================================================
# Logging
# =============================================================================

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(debug: bool = False, log_file: Path | None = None) -> Path:
    """
    Send application logs to a file.

    The TUI owns the terminal, so nothing is logged to stderr.

    Args:
        debug: Log at DEBUG level instead of INFO.
        log_file: Destination. Defaults to the XDG state directory.

    Returns:
        The log file path.
    """
    log_file = log_file or Config.log_file_path()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("nexmail")
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    return log_file


def print_paths() -> None:
    """Show where config, mailbox and log live (for --paths)."""
    print(f"Config file:  {Config.config_file_path()}")
    print(f"Database:     {Config.database_path()}")
    print(f"Log file:     {Config.log_file_path()}")
