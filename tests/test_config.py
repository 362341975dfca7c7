# =============================================================================
# Configuration Tests
# =============================================================================

import logging

import pytest

from nexmail.config import Config, ConfigError, get_xdg_config_home, setup_logging


def test_missing_file_gives_defaults(temp_dir):
    config = Config.load(temp_dir / "missing.toml")

    assert config.general.user_email == "user@example.com"
    assert config.spam.enabled
    assert config.spam.threshold == 70
    assert config.spam.warn_on_send
    assert config.ui.confirm_delete
    assert config.ui.show_summary


def test_default_location_uses_xdg(temp_dir):
    assert get_xdg_config_home() == temp_dir / "config" / "nexmail"
    assert Config.config_file_path() == temp_dir / "config" / "nexmail" / "config.toml"
    assert Config.database_path() == temp_dir / "data" / "nexmail" / "nexmail.db"
    assert Config.load().spam.threshold == 70


def test_save_and_load(temp_dir):
    path = temp_dir / "config.toml"
    config = Config()
    config.general.user_email = "me@example.org"
    config.spam.threshold = 55
    config.spam.warn_on_send = False
    config.ui.time_format = "%I:%M %p"
    config.save(path)

    loaded = Config.load(path)

    assert loaded == config


def test_partial_file_keeps_other_defaults(temp_dir):
    path = temp_dir / "config.toml"
    path.write_text('[spam]\nthreshold = 40\n')

    config = Config.load(path)

    assert config.spam.threshold == 40
    assert config.spam.enabled
    assert config.general.user_email == "user@example.com"


def test_invalid_toml(temp_dir):
    path = temp_dir / "config.toml"
    path.write_text("[spam\nthreshold = ")

    with pytest.raises(ConfigError, match="Invalid config file"):
        Config.load(path)


@pytest.mark.parametrize("value", ["150", "-1", '"high"'])
def test_invalid_threshold(temp_dir, value):
    path = temp_dir / "config.toml"
    path.write_text(f"[spam]\nthreshold = {value}\n")

    with pytest.raises(ConfigError, match="threshold"):
        Config.load(path)


def test_setup_logging_writes_to_file(temp_dir):
    log_file = setup_logging(debug=True, log_file=temp_dir / "logs" / "nexmail.log")
    logging.getLogger("nexmail.tests").debug("debug line")
    for handler in logging.getLogger("nexmail").handlers:
        handler.flush()

    assert log_file.exists()
    assert "debug line" in log_file.read_text()


def test_setup_logging_defaults_to_state_dir(temp_dir):
    log_file = setup_logging()

    assert log_file == temp_dir / "state" / "nexmail" / "nexmail.log"
    assert logging.getLogger("nexmail").level == logging.INFO


def test_setup_logging_closes_replaced_handlers(temp_dir):
    setup_logging(log_file=temp_dir / "first.log")
    first = logging.getLogger("nexmail").handlers[0]

    setup_logging(log_file=temp_dir / "second.log")
    handlers = logging.getLogger("nexmail").handlers

    assert len(handlers) == 1
    assert first not in handlers
    assert first.stream is None
    assert handlers[0].baseFilename == str(temp_dir / "second.log")


def test_wrong_type(temp_dir):
    path = temp_dir / "config.toml"
    path.write_text('[ui]\nconfirm_delete = "yes"\n')

    with pytest.raises(ConfigError, match="ui.confirm_delete"):
        Config.load(path)


def test_unknown_keys_are_ignored(temp_dir):
    path = temp_dir / "config.toml"
    path.write_text('[ui]\ntheme = "dark"\nshow_summary = false\n')

    config = Config.load(path)

    assert config.ui.show_summary is False
