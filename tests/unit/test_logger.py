"""Tests for logger configuration."""

from __future__ import annotations

import logging
import os
import time

import pytest

from domevent.lib.logger import clean_old_logs, configure_logger


@pytest.fixture
def package_logger():
    """Restore the domevent logger after each test."""
    logger = logging.getLogger("domevent")
    saved = (logger.handlers[:], logger.level, logger.propagate)
    yield logger
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


def test_clean_old_logs_keeps_newest(tmp_path):
    """Test that only the most recent log files are kept."""
    now = time.time()
    for i in range(4):
        path = tmp_path / f"{i}.log"
        path.write_text("log")
        os.utime(path, (now + i, now + i))
    (tmp_path / "notes.txt").write_text("keep me")

    clean_old_logs(tmp_path, max_files=2)

    assert sorted(p.name for p in tmp_path.iterdir()) == ["2.log", "3.log", "notes.txt"]


def test_console_only(package_logger):
    handlers = configure_logger(log_level=logging.DEBUG)

    assert len(handlers) == 1
    assert package_logger.handlers == handlers
    assert package_logger.level == logging.DEBUG
    assert package_logger.propagate is False


def test_log_dir_adds_file_handler(tmp_path, package_logger):
    """Test that a log file is created in the requested directory."""
    log_dir = tmp_path / "logs"

    handlers = configure_logger(log_level=logging.INFO, log_dir=log_dir)
    logging.getLogger("domevent.lib.event_target").info("hello from the test")
    for handler in handlers:
        handler.flush()

    log_files = list(log_dir.glob("*.log"))
    assert len(handlers) == 2
    assert len(log_files) == 1
    assert "hello from the test" in log_files[0].read_text()


def test_reconfigure_replaces_handlers(package_logger):
    configure_logger()
    handlers = configure_logger(log_level=logging.ERROR)

    assert package_logger.handlers == handlers
    assert package_logger.level == logging.ERROR


def test_log_dir_keeps_max_files_including_new_one(tmp_path, package_logger):
    """Test that the new log file counts towards max_log_files."""
    past = time.time() - 100
    for i in range(3):
        path = tmp_path / f"old{i}.log"
        path.write_text("log")
        os.utime(path, (past + i, past + i))

    configure_logger(log_dir=tmp_path, max_log_files=2)

    names = sorted(p.name for p in tmp_path.glob("*.log"))
    assert len(names) == 2
    assert "old2.log" in names
    assert "old0.log" not in names and "old1.log" not in names
