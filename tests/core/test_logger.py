"""Tests for logger module"""

import logging

import pytest
from agentdeck.core.logger import parse_level, setup_logging, teardown_logging


@pytest.fixture
def log_file(tmp_path):
    path = tmp_path / "agentdeck.log"
    teardown_logging()
    yield path
    teardown_logging()


class TestParseLevel:
    def test_names(self):
        assert parse_level("debug") == logging.DEBUG
        assert parse_level(" WARNING ") == logging.WARNING

    def test_numbers_pass_through(self):
        assert parse_level(logging.ERROR) == logging.ERROR

    def test_unknown_falls_back_to_info(self):
        assert parse_level("chatty") == logging.INFO
        assert parse_level(None) == logging.INFO
        assert parse_level("") == logging.INFO


class TestSetupLogging:
    def test_writes_formatted_records(self, log_file):
        logger = setup_logging("DEBUG", log_file)
        logging.getLogger("agentdeck.core.completion").debug("scanned %s", "/tmp")
        for handler in logger.handlers:
            handler.flush()

        line = log_file.read_text().strip()
        assert "[DEBUG] agentdeck.core.completion: scanned /tmp" in line
        assert line.startswith("[")

    def test_second_call_only_changes_level(self, log_file):
        logger = setup_logging("INFO", log_file)
        handlers = list(logger.handlers)

        setup_logging("WARNING", log_file)

        assert logger.handlers == handlers
        assert logger.level == logging.WARNING
