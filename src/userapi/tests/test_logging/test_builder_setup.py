# src/userapi/tests/test_logging/test_builder_setup.py
import logging

from userapi.core.logging.builder import make_dict_config, setup_logging


# Create a minimal Settings-like object for testing
class DummySettings:
    LOG_FORMAT = "json"
    LOG_LEVEL = "INFO"
    LOG_TO_STDOUT = False
    LOG_DIR = None  # will be set in test
    LOG_MAX_BYTES = 1000
    LOG_BACKUP_COUNT = 1
    ENV = "development"
    ENABLE_SQL_LOGGING = False


def test_make_dict_config_with_log_dir_uses_files(tmp_path):
    settings = DummySettings()
    settings.LOG_DIR = tmp_path
    cfg = make_dict_config(settings)
    assert "console" in cfg["handlers"]
    assert "file" in cfg["handlers"]
    assert "error_file" in cfg["handlers"]
    assert "error_console" not in cfg["handlers"]
    assert cfg["handlers"]["file"]["filename"] == str(tmp_path / "app.log")
    assert "json" in cfg["formatters"]


def test_make_dict_config_stdout_only():
    settings = DummySettings()
    settings.LOG_TO_STDOUT = True
    cfg = make_dict_config(settings)
    assert set(cfg["handlers"]) == {"console", "error_console"}
    assert cfg["handlers"]["console"]["formatter"] == "json"


def test_sql_logging_toggle():
    settings = DummySettings()
    settings.LOG_TO_STDOUT = True
    assert make_dict_config(settings)["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"
    settings.ENABLE_SQL_LOGGING = True
    assert make_dict_config(settings)["loggers"]["sqlalchemy.engine"]["level"] == "DEBUG"


def test_setup_logging_creates_log_dir(tmp_path):
    settings = DummySettings()
    settings.LOG_DIR = tmp_path / "logs"
    assert not settings.LOG_DIR.exists()
    setup_logging(settings)
    assert settings.LOG_DIR.exists()
    root = logging.getLogger()
    assert root.handlers
    assert root.level == logging.INFO


def test_setup_logging_text_format(capsys):
    settings = DummySettings()
    settings.LOG_TO_STDOUT = True
    settings.LOG_FORMAT = "text"
    setup_logging(settings)
    logging.getLogger("userapi.test").warning("plain text line")
    err = capsys.readouterr().err
    assert "plain text line" in err
    assert "WARNING" in err
