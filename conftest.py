"""
Repository-level pytest configuration.

Why this exists:
  - Register command line options shared by every suite (they must live at
    the rootdir so pytest sees them before collection)
  - Initialize Loguru once per worker from config/config.yaml
"""

from __future__ import annotations

from cruise_tools.common.global_config import init_logger


def pytest_addoption(parser):
    group = parser.getgroup("cruise", "Cruise booking UI suite")
    group.addoption(
        "--ui-project",
        action="store",
        default=None,
        help="Browser project from config/config.yaml (default: ui.project)",
    )
    group.addoption(
        "--headed",
        action="store_true",
        default=False,
        help="Run the browser with a visible window",
    )
    group.addoption(
        "--ci",
        action="store_true",
        default=False,
        help="CI mode: fail the run if any test is marked `only`",
    )


def pytest_configure(config):
    init_logger()
