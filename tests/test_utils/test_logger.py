"""Tests for loguru setup."""

from loguru import logger

from config.settings import Settings
from dbc_quote.utils.logger import setup_logger


def test_file_sink_captures_debug(tmp_path, monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    setup_logger(level="WARNING", log_dir=str(tmp_path))
    logger.debug("[DBC] quote trace")
    logger.remove()  # closes the file sink

    logs = list(tmp_path.glob("dbc_quote_*.log"))
    assert len(logs) == 1
    assert "[DBC] quote trace" in logs[0].read_text()


def test_stdout_only(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    setup_logger(level="WARNING", log_dir=None)
    logger.debug("[DBC] console trace")
    logger.remove()

    assert "[DBC] console trace" in capsys.readouterr().out
    assert list(tmp_path.iterdir()) == []


def test_defaults_follow_settings(capsys, monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setattr(
        "dbc_quote.utils.logger.settings",
        Settings(_env_file=None, log_level="DEBUG", json_logs=True),
    )
    setup_logger(log_dir=None)
    logger.debug("[DBC] settings trace")
    logger.remove()

    out = capsys.readouterr().out
    assert "[DBC] settings trace" in out
    assert '"level"' in out
