"""Tests for the logging helper."""

import logging

from neldermead import minimize_unbounded, setup_logging
from tests.objectives import shifted_quadratic


def test_console_only(restore_root_logger):
    logger = setup_logging()

    assert logger is logging.getLogger()
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)


def test_file_handler_receives_run_summary(tmp_path, restore_root_logger):
    log_dir = tmp_path / 'log'
    logger = setup_logging(str(log_dir))
    minimize_unbounded(shifted_quadratic, [5.0, 5.0], 1.0)
    for handler in logger.handlers:
        handler.flush()

    files = list(log_dir.glob('nelder_mead_*.log'))
    assert len(files) == 1
    content = files[0].read_text(encoding='utf-8')
    assert 'INFO - Nelder-Mead finished' in content


def test_repeated_setup_does_not_duplicate_handlers(restore_root_logger):
    setup_logging()
    logger = setup_logging(level=logging.DEBUG)

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
