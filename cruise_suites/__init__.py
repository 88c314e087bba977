"""
Test suites package.

`cruise_suites` stays importable to support:
  - IDE navigation
  - programmatic runners (e.g., `run_tests.py`)
  - page objects and framework imported by the tests
"""
