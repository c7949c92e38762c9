"""
Unit Tests for Propagation Errors

Run with:
    python -m pytest tests/test_errors.py -v
"""

import unittest

from orbit_engine.errors import (
    ERROR_CODES,
    ConvergenceFailureError,
    InvalidElementError,
    NumericalInstabilityError,
    OrbitDecayedError,
    PropagationError,
)


class TestErrorCodes(unittest.TestCase):
    """Test error code meanings."""

    def test_error_code_meanings(self):
        """Test that every code has a description."""
        for code in range(10):
            self.assertIn(code, ERROR_CODES)
            self.assertIsInstance(ERROR_CODES[code], str)

    def test_default_codes(self):
        """Test the default code of each error type."""
        expected = {
            InvalidElementError: 9,
            NumericalInstabilityError: 7,
            ConvergenceFailureError: 8,
            OrbitDecayedError: 6,
        }
        for error_type, code in expected.items():
            with self.subTest(error_type=error_type.__name__):
                error = error_type("failure")
                self.assertEqual(error.code, code)
                self.assertEqual(error.description, ERROR_CODES[code])
                self.assertIsInstance(error, PropagationError)
                self.assertIsInstance(error, RuntimeError)

    def test_explicit_code(self):
        """Test that decay errors carry the specific check that failed."""
        error = OrbitDecayedError("pl < 0", code=4, tsince=12.5)
        self.assertEqual(error.code, 4)
        self.assertEqual(error.tsince, 12.5)
        self.assertEqual(str(error), "pl < 0")

    def test_invalid_element_is_value_error(self):
        """Test that invalid input can be caught as ValueError."""
        self.assertTrue(issubclass(InvalidElementError, ValueError))
        self.assertFalse(issubclass(OrbitDecayedError, ValueError))

    def test_unknown_code(self):
        """Test the description of an unknown code."""
        self.assertIn("Unknown", PropagationError("x", code=42).description)


class TestDiagnostics(unittest.TestCase):
    """Test diagnostic completeness."""

    def test_diagnostic_completeness(self):
        """Test that diagnostics include all required fields."""
        for code in range(1, 10):
            with self.subTest(code=code):
                diagnostics = PropagationError("failure", code=code, tsince=60.0).diagnostics()
                for key in ("error_type", "error_code", "error_description", "message",
                            "physical_meaning", "recommended_action", "tsince_minutes"):
                    self.assertIn(key, diagnostics)
                self.assertTrue(diagnostics["physical_meaning"])
                self.assertTrue(diagnostics["recommended_action"])

    def test_initialization_failure_has_no_time(self):
        """Test that errors raised at construction omit the elapsed time."""
        diagnostics = NumericalInstabilityError("eta >= 1").diagnostics()
        self.assertNotIn("tsince_minutes", diagnostics)
        self.assertEqual(diagnostics["error_type"], "NumericalInstabilityError")


if __name__ == "__main__":
    unittest.main()
