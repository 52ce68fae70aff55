"""
Tests for logging setup.
"""

import logging

from logging_config import LOGGER_NAMESPACE, get_logger, setup_logging


def test_get_logger_is_namespaced():
    assert get_logger("modules.packer").name == f"{LOGGER_NAMESPACE}.modules.packer"
    assert get_logger(LOGGER_NAMESPACE).name == LOGGER_NAMESPACE


def test_file_logging_writes_thread_name(tmp_path):
    logger = setup_logging(app_name="roll_layout_test", log_dir=tmp_path)
    logger.warning("press check")
    for handler in logger.handlers:
        handler.flush()

    text = (tmp_path / "roll_layout_test.log").read_text(encoding="utf-8")
    assert "[MainThread] roll_layout_test - press check" in text
    assert (tmp_path / "roll_layout_test_error.log").exists()

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_console_only_when_file_logging_disabled():
    logger = setup_logging(app_name="roll_layout_console", enable_file_logging=False)

    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert logger.propagate is False


def test_errors_also_go_to_the_error_log(tmp_path):
    logger = setup_logging(app_name="roll_layout_errors", log_dir=tmp_path)
    logger.info("layout ok")
    logger.error("roll jammed")
    for handler in logger.handlers:
        handler.flush()

    error_text = (tmp_path / "roll_layout_errors_error.log").read_text(encoding="utf-8")
    assert "roll jammed" in error_text
    assert "layout ok" not in error_text

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
