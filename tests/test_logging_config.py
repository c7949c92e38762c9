"""
Unit Tests for Logging Configuration

Run with:
    python -m pytest tests/test_logging_config.py -v
"""

import logging
import os
import tempfile
import unittest
from unittest import mock

from orbit_engine.logging_config import LOG_LEVEL_ENV, configure_logging, get_logger


class TestConfigureLogging(unittest.TestCase):
    """Test root logger configuration."""

    def setUp(self):
        """Save the root logger state."""
        self.root = logging.getLogger()
        self.saved_handlers = self.root.handlers[:]
        self.saved_level = self.root.level

    def tearDown(self):
        """Restore the root logger state."""
        for handler in self.root.handlers[:]:
            self.root.removeHandler(handler)
            if handler not in self.saved_handlers:
                handler.close()
        for handler in self.saved_handlers:
            self.root.addHandler(handler)
        self.root.setLevel(self.saved_level)

    def test_explicit_level(self):
        """Test level given by name and by number."""
        configure_logging("DEBUG")
        self.assertEqual(self.root.level, logging.DEBUG)
        configure_logging(logging.WARNING)
        self.assertEqual(self.root.level, logging.WARNING)

    def test_environment_level(self):
        """Test the environment variable default."""
        with mock.patch.dict(os.environ, {LOG_LEVEL_ENV: "error"}):
            configure_logging()
        self.assertEqual(self.root.level, logging.ERROR)

    def test_default_level(self):
        """Test the INFO default."""
        with mock.patch.dict(os.environ, {}, clear=True):
            configure_logging()
        self.assertEqual(self.root.level, logging.INFO)

    def test_unknown_level(self):
        """Test that an unknown level name is rejected."""
        with self.assertRaises(ValueError):
            configure_logging("LOUD")

    def test_log_file(self):
        """Test that messages reach the log file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "orbit.log")
            configure_logging("INFO", log_file=path)
            get_logger("orbit_engine.test").info("Satellite propagated successfully")
            for handler in self.root.handlers:
                handler.flush()
            with open(path) as f:
                contents = f.read()
            for handler in self.root.handlers[:]:
                if isinstance(handler, logging.FileHandler):
                    self.root.removeHandler(handler)
                    handler.close()
        self.assertIn("orbit_engine.test - INFO - Satellite propagated successfully", contents)


class TestGetLogger(unittest.TestCase):
    """Test logger lookup."""

    def test_named_logger(self):
        """Test that get_logger returns the named logger."""
        self.assertIs(get_logger("orbit_engine.satellite"), logging.getLogger("orbit_engine.satellite"))

    def test_library_does_not_configure_on_import(self):
        """Test that importing the package adds no handlers to its loggers."""
        import orbit_engine  # noqa: F401
        self.assertEqual(logging.getLogger("orbit_engine").handlers, [])


if __name__ == "__main__":
    unittest.main()
