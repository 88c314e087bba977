"""
================================================================================
Soft Checks
================================================================================

Collect-then-report assertions for UI scenarios.

A scenario gathers every check as a `SoftCheck(value, message)` and asserts
once at the end, so a single run reports all failing acceptance criteria
instead of stopping at the first one.

Usage:
    checks = [
        SoftCheck(await search.is_result_grid_displayed(), "Results grid should be displayed."),
        SoftCheck(await search.is_cheapest_first_option_default(), "Default sort should be set."),
    ]
    assert_soft_checks(checks)

================================================================================
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

import allure
from loguru import logger

from cruise_tools.report_tools.allure_utils import attach_failed_checks


@dataclass(frozen=True)
class SoftCheck:
    """One acceptance check: its outcome and the message reported on failure."""
    value: Optional[bool]
    message: str


def collect_failures(checks: Sequence[SoftCheck]) -> List[str]:
    """Messages of the checks that did not hold, in their original order."""
    return [check.message for check in checks if not check.value]


def format_failures(failures: Sequence[str]) -> str:
    return "Failed assertions:\n" + "\n".join(failures)


def assert_soft_checks(checks: Sequence[SoftCheck]) -> None:
    """
    Assert that every check holds, reporting all failures together.

    Raises:
        AssertionError: Listing every failed check message
    """
    failures = collect_failures(checks)

    with allure.step(f"Verify {len(checks)} checks"):
        for check in checks:
            status = "✅ PASS" if check.value else "❌ FAIL"
            logger.debug(f"{status}: {check.message}")

        if failures:
            logger.error(f"{len(failures)} of {len(checks)} checks failed")
            attach_failed_checks(failures)
            raise AssertionError(format_failures(failures))


__all__ = [
    "SoftCheck",
    "assert_soft_checks",
    "collect_failures",
    "format_failures",
]
