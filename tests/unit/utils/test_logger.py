# SPDX-License-Identifier: Apache-2.0
"""Unit tests for logging setup."""

import logging
from logging.handlers import RotatingFileHandler

from utils.logger import get_log_file_path, get_logger, set_log_level, setup_logging


def test_setup_logging_writes_rotating_file(tmp_path):
    logger = setup_logging(log_dir=tmp_path, level="DEBUG", console_output=False)

    file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].level == logging.DEBUG

    get_logger("core.matcher").info("matched 3 devices")
    file_handlers[0].flush()

    assert get_log_file_path() == tmp_path / "audioxref.log"
    assert "matched 3 devices" in (tmp_path / "audioxref.log").read_text(encoding="utf-8")


def test_console_only_logging_uses_requested_level():
    logger = setup_logging(level="INFO", file_output=False)

    assert len(logger.handlers) == 1
    assert logger.handlers[0].level == logging.INFO


def test_console_is_quiet_when_file_logging(tmp_path):
    logger = setup_logging(log_dir=tmp_path, level="DEBUG")

    console = [h for h in logger.handlers if not isinstance(h, RotatingFileHandler)]
    assert console[0].level == logging.WARNING


def test_setup_logging_is_idempotent(tmp_path):
    setup_logging(log_dir=tmp_path, console_output=False)
    logger = setup_logging(log_dir=tmp_path, console_output=False)

    assert len(logger.handlers) == 1


def test_no_outputs_installs_null_handler():
    logger = setup_logging(console_output=False, file_output=False)

    assert isinstance(logger.handlers[0], logging.NullHandler)


def test_environment_selects_default_level(monkeypatch):
    monkeypatch.setenv("AUDIOXREF_ENV", "development")

    logger = setup_logging(file_output=False)

    assert logger.handlers[0].level == logging.DEBUG


def test_get_logger_prefixes_root_name():
    assert get_logger("engines.enumeration").name == "audioxref.engines.enumeration"
    assert get_logger("audioxref.core").name == "audioxref.core"


def test_set_log_level_updates_file_handler(tmp_path):
    logger = setup_logging(log_dir=tmp_path, level="INFO", console_output=False)

    set_log_level("ERROR")

    assert logger.handlers[0].level == logging.ERROR
