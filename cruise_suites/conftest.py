"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the suite-wide pytest configuration.
It registers common markers and applies the focused-test policy.

================================================================================
"""

import os

import pytest

from cruise_suites.ui_testing.framework.config_loader import ConfigLoader


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests simulating user flows"
    )
    config.addinivalue_line(
        "markers", "only: Run only the marked tests (rejected in CI)"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: Browser tests against the live site"
    )
    config.addinivalue_line(
        "markers", "unit: Framework tests without a browser"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "search: Tests related to cruise search"
    )
    config.addinivalue_line(
        "markers", "itinerary: Tests related to sail itineraries"
    )
    config.addinivalue_line(
        "markers", "booking: Tests related to the booking flow"
    )


def _is_ci(config) -> bool:
    return bool(os.getenv("CI")) or bool(config.getoption("--ci", default=False))


def pytest_collection_modifyitems(config, items):
    """
    Add domain markers by location, bound UI tests by `ui.test_timeout` and
    honour `@pytest.mark.only`.

    Locally, any test marked `only` narrows the run to the marked tests.
    In CI the marker is treated as a leftover and fails the run.
    """
    test_timeout_s = None
    for item in items:
        if "ui_testing" in item.path.parts:
            item.add_marker(pytest.mark.ui)
            # An explicit timeout marker on the test wins
            if item.get_closest_marker("timeout") is None:
                if test_timeout_s is None:
                    test_timeout_s = ConfigLoader().ui_settings().test_timeout / 1000
                item.add_marker(pytest.mark.timeout(test_timeout_s))

        if "unit" in item.path.parts:
            item.add_marker(pytest.mark.unit)

    focused = [item for item in items if item.get_closest_marker("only")]
    if not focused:
        return

    if _is_ci(config):
        names = ", ".join(item.nodeid for item in focused)
        raise pytest.UsageError(f"Tests marked `only` are not allowed in CI: {names}")

    deselected = [item for item in items if item not in focused]
    if deselected:
        config.hook.pytest_deselected(items=deselected)
    items[:] = focused


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Cruise Booking E2E Suite",
        "=" * 60,
        "",
    ]
