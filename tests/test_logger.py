#!filepath: tests/test_logger.py
"""
Test suite for the logger module.

This module contains unit tests for the logger module to ensure
it correctly creates and configures loggers.
"""

import os
import sys
import logging
import tempfile
import unittest
from unittest.mock import patch, MagicMock

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from src.logger import (  # pylint: disable=wrong-import-position,import-error
    LOG_FORMAT,
    create_logger,
    get_logger,
    resolve_level,
)


class TestLogger(unittest.TestCase):
    """Test suite for the logger module."""

    def setUp(self):
        """Set up test fixtures."""
        # Patch os.makedirs to avoid creating real directories
        self.makedirs_patcher = patch("os.makedirs")
        self.mock_makedirs = self.makedirs_patcher.start()

    def tearDown(self):
        """Tear down test fixtures."""
        self.makedirs_patcher.stop()
        logging.getLogger("test_logger").handlers.clear()

    @patch("logging.FileHandler")
    def test_logger_creation(self, mock_file_handler):
        """Test that a logger is created with the correct name and level."""
        mock_file_handler.return_value = MagicMock()

        created_logger = create_logger("test_logger")

        self.assertEqual(created_logger.name, "test_logger")
        self.assertEqual(created_logger.level, logging.INFO)
        self.mock_makedirs.assert_called_once_with("logs", exist_ok=True)
        mock_file_handler.assert_called_once()
        self.assertEqual(len(created_logger.handlers), 1)
        self.assertFalse(created_logger.propagate)

    @patch("logging.FileHandler")
    def test_logger_custom_level(self, mock_file_handler):
        """Test that the logger can be created with a custom level."""
        mock_file_handler.return_value = MagicMock()

        created_logger = create_logger("test_logger", level=logging.DEBUG)

        self.assertEqual(created_logger.level, logging.DEBUG)
        mock_file_handler.return_value.setLevel.assert_called_once_with(logging.DEBUG)

    @patch("logging.FileHandler")
    def test_console_handler(self, mock_file_handler):
        """The console flag adds a stream handler next to the file handler."""
        mock_file_handler.return_value = MagicMock()

        created_logger = create_logger("test_logger", console=True)

        self.assertEqual(len(created_logger.handlers), 2)
        stream_handlers = [
            h for h in created_logger.handlers if isinstance(h, logging.StreamHandler)
        ]
        self.assertEqual(len(stream_handlers), 1)
        self.assertEqual(
            stream_handlers[0].formatter._fmt,  # pylint: disable=protected-access
            LOG_FORMAT,
        )

    @patch("src.logger.datetime")
    @patch("logging.FileHandler")
    def test_timestamp_in_filename(self, mock_file_handler, mock_datetime):
        """Test that the timestamp is included in the log filename."""
        mock_datetime_instance = MagicMock()
        mock_datetime_instance.strftime.return_value = "20240101_120000"
        mock_datetime.now.return_value = mock_datetime_instance
        mock_file_handler.return_value = MagicMock()

        create_logger("test_logger", log_dir="custom_logs")

        self.mock_makedirs.assert_called_once_with("custom_logs", exist_ok=True)
        mock_file_handler.assert_called_once_with(
            os.path.join("custom_logs", "test_logger_20240101_120000.log")
        )

    def test_handler_formatter(self):
        """Test that the handler has the correct formatter."""
        with patch("logging.FileHandler", autospec=True) as mock_file_handler:
            mock_handler = MagicMock()
            mock_file_handler.return_value = mock_handler

            create_logger("test_logger")

            mock_handler.setFormatter.assert_called_once()
            formatter = mock_handler.setFormatter.call_args[0][0]
            self.assertEqual(
                formatter._fmt,  # pylint: disable=protected-access
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            )

    def test_existing_handlers_cleared(self):
        """Test that existing handlers are cleared when creating a logger."""
        existing_logger = logging.getLogger("test_logger")
        handler = logging.NullHandler()
        existing_logger.addHandler(handler)

        with patch("logging.FileHandler", autospec=True):
            updated_logger = create_logger("test_logger")

            self.assertIs(updated_logger, existing_logger)
            self.assertNotIn(handler, updated_logger.handlers)
            self.assertEqual(len(updated_logger.handlers), 1)

    def test_get_logger_sets_level(self):
        """get_logger returns the named logger and applies a level when given."""
        logger = get_logger("test_logger", logging.WARNING)
        self.assertIs(logger, logging.getLogger("test_logger"))
        self.assertEqual(logger.level, logging.WARNING)

        self.assertEqual(get_logger("test_logger").level, logging.WARNING)


class TestResolveLevel(unittest.TestCase):
    """Tests for mapping configured level names."""

    def test_known_names(self):
        self.assertEqual(resolve_level("debug"), logging.DEBUG)
        self.assertEqual(resolve_level("WARNING"), logging.WARNING)

    def test_unknown_or_empty_falls_back(self):
        self.assertEqual(resolve_level("verbose"), logging.INFO)
        self.assertEqual(resolve_level(None, logging.ERROR), logging.ERROR)
        self.assertEqual(resolve_level(""), logging.INFO)

    def test_non_level_attribute_is_rejected(self):
        """Names of logging attributes that are not levels are ignored."""
        self.assertEqual(resolve_level("basicConfig"), logging.INFO)


def test_real_logging():
    """Test that logs are actually written to a file."""
    with tempfile.TemporaryDirectory() as temp_logs_dir:
        created_logger = create_logger("real_logger", log_dir=temp_logs_dir)
        child = created_logger.getChild("DataWrangler")

        created_logger.info("Test info message")
        child.warning("Test warning message")

        for handler in created_logger.handlers:
            handler.flush()

        log_files = [f for f in os.listdir(temp_logs_dir) if f.startswith("real_logger_")]
        assert len(log_files) == 1

        with open(
            os.path.join(temp_logs_dir, log_files[0]), "r", encoding="utf-8"
        ) as log_file:
            log_content = log_file.read()

        for handler in list(created_logger.handlers):
            handler.close()
            created_logger.removeHandler(handler)

        assert "Test info message" in log_content
        assert "real_logger.DataWrangler - WARNING - Test warning message" in log_content


if __name__ == "__main__":
    unittest.main()
