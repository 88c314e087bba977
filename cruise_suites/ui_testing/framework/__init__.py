"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework for the cruise booking site.

Components:
    - ui_manager: timeout/settle/log/raise-or-report policy per interaction
    - page_base: site navigation and the per-test page context
    - browser_manager: browser lifecycle and device profiles
    - config_loader: YAML + environment run configuration
    - soft_checks: collect-then-report assertions
    - tracing: per-test trace archives

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_manager import BrowserManager
from .config_loader import BrowserProfile, ConfigLoader, ConfigurationError, UISettings
from .page_base import PageContext, SiteNavigator
from .soft_checks import SoftCheck, assert_soft_checks, collect_failures
from .tracing import TraceRecorder, slugify_title, trace_dir_for
from .ui_manager import (
    ActionFailure,
    ActionResult,
    FailureReason,
    UIManager,
    UIManagerConfig,
    UIOptions,
)

__all__ = [
    "ActionFailure",
    "ActionResult",
    "BrowserManager",
    "BrowserProfile",
    "ConfigLoader",
    "ConfigurationError",
    "FailureReason",
    "PageContext",
    "SiteNavigator",
    "SoftCheck",
    "TraceRecorder",
    "UIManager",
    "UIManagerConfig",
    "UIOptions",
    "UISettings",
    "assert_soft_checks",
    "collect_failures",
    "slugify_title",
    "trace_dir_for",
]
