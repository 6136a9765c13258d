"""Tests for logging configuration"""
import logging

import pytest

from git_branch_sweeper.logging_config import ColoredFormatter, get_logger, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


class TestGetLogger:
    def test_strips_package_prefix(self):
        assert get_logger("git_branch_sweeper.config").name == "config"

    def test_strips_services_prefix(self):
        assert get_logger("git_branch_sweeper.services.classifier_service").name == "classifier_service"

    def test_other_names_untouched(self):
        assert get_logger("somewhere.else").name == "somewhere.else"


class TestSetupLogging:
    def test_default_level_is_warning(self, restore_root_logger):
        setup_logging()

        console_handlers = [h for h in restore_root_logger.handlers if isinstance(h, logging.StreamHandler)]
        assert console_handlers[-1].level == logging.WARNING
        assert isinstance(console_handlers[-1].formatter, ColoredFormatter)

    def test_verbose_is_info(self, restore_root_logger):
        setup_logging(verbose=True)
        assert restore_root_logger.handlers[-1].level == logging.INFO

    def test_log_file_receives_debug(self, restore_root_logger, temp_dir):
        log_file = temp_dir / "sweep.log"
        setup_logging(log_file=log_file)

        get_logger("git_branch_sweeper.test").debug("hello from the test")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert "hello from the test" in log_file.read_text()
