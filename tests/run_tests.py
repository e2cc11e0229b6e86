#!/usr/bin/env python3
# File: tests/run_tests.py
"""
Test runner for the Parking Capacity Service tests.

Usage:
    python tests/run_tests.py                      # all tests
    python tests/run_tests.py unit.test_dtos       # one module
    python tests/run_tests.py unit.test_dtos.TestParkingRequestDTO
"""

import unittest
import sys
from pathlib import Path

# Add the tests and src directories to the Python path
TESTS_DIR = Path(__file__).parent
sys.path.insert(0, str(TESTS_DIR))
sys.path.insert(0, str(TESTS_DIR.parent / "src"))


def run_all_tests():
    """Run all test suites"""
    test_loader = unittest.TestLoader()
    test_suite = test_loader.discover(str(TESTS_DIR), pattern='test_*.py', top_level_dir=str(TESTS_DIR))

    test_runner = unittest.TextTestRunner(verbosity=2)
    return test_runner.run(test_suite)


def run_specific_test(test_name):
    """Run a specific test module or test case, e.g. ``unit.test_dtos``"""
    test_loader = unittest.TestLoader()
    test_suite = test_loader.loadTestsFromName(test_name)

    test_runner = unittest.TextTestRunner(verbosity=2)
    return test_runner.run(test_suite)


if __name__ == "__main__":
    if len(sys.argv) > 1:
        result = run_specific_test(sys.argv[1])
    else:
        result = run_all_tests()

    sys.exit(0 if result.wasSuccessful() else 1)
