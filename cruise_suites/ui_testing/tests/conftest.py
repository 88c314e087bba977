"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for UI tests, providing fixtures for browser
management, page objects, and test setup/teardown.

Key Features:
- Browser lifecycle per worker, isolated context per test
- Per-test tracing, archived for tests that did not pass
- Failure screenshot and URL attached to Allure
- Page Object fixtures sharing one PageContext

================================================================================
"""

import dataclasses
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator

import allure
import pytest
import pytest_asyncio
from loguru import logger
from playwright.async_api import BrowserContext, Error as PlaywrightError, Page

from cruise_suites.ui_testing.framework.browser_manager import BrowserManager
from cruise_suites.ui_testing.framework.config_loader import (
    BrowserProfile,
    ConfigLoader,
    UISettings,
)
from cruise_suites.ui_testing.framework.page_base import PageContext
from cruise_suites.ui_testing.framework.tracing import TraceRecorder, trace_dir_for
from cruise_suites.ui_testing.framework.ui_manager import UIManagerConfig
from cruise_suites.ui_testing.pages.booking_page import BookingPage
from cruise_suites.ui_testing.pages.itinerary_page import ItineraryPage
from cruise_suites.ui_testing.pages.search_page import SearchPage
from cruise_tools.report_tools.allure_utils import (
    attach_json,
    attach_screenshot,
    attach_text,
    attach_trace,
)


# ================================================================================
# Settings Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def ui_settings(request) -> UISettings:
    """Run settings from config/config.yaml with command line overrides."""
    settings = ConfigLoader().ui_settings()
    if request.config.getoption("--ui-project"):
        settings = dataclasses.replace(settings, project=request.config.getoption("--ui-project"))
    if request.config.getoption("--headed"):
        settings = dataclasses.replace(settings, headless=False)
    return settings


@pytest.fixture(scope="session")
def browser_profile(ui_settings: UISettings) -> BrowserProfile:
    return ConfigLoader().browser_profile(ui_settings.project)


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def browser_manager(
    browser_profile: BrowserProfile,
    ui_settings: UISettings,
) -> AsyncGenerator[BrowserManager, None]:
    """
    Session-scoped browser manager fixture.

    One browser per worker, reducing browser launch overhead.
    """
    async with BrowserManager(browser_profile, ui_settings) as manager:
        yield manager


@pytest_asyncio.fixture(loop_scope="session")
async def context(
    request,
    browser_manager: BrowserManager,
    ui_settings: UISettings,
) -> AsyncGenerator[BrowserContext, None]:
    """
    Function-scoped browser context with tracing.

    Tracing is always stopped; the archive is kept only when the test did
    not pass (or when `tracing.keep_on_pass` is set).
    """
    context = await browser_manager.new_context()
    recorder = None
    if ui_settings.trace_enabled:
        recorder = TraceRecorder(
            context,
            trace_dir_for(ui_settings.results_dir, request.node.path, scenario_title(request.node)),
        )
        await recorder.start()

    try:
        yield context
    finally:
        if recorder is not None:
            passed = _test_passed(request.node)
            archive = await recorder.stop(save=ui_settings.trace_keep_on_pass or not passed)
            if archive is not None and not passed:
                attach_trace(archive)
        await browser_manager.release_context(context)


@pytest_asyncio.fixture(loop_scope="session")
async def page(request, context: BrowserContext) -> AsyncGenerator[Page, None]:
    """
    Function-scoped page fixture.

    On failure a full-page screenshot and the current URL go to Allure.
    """
    async with open_page(context, request.node) as page:
        yield page


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def page_context(page: Page, ui_settings: UISettings) -> PageContext:
    return PageContext.create(page, UIManagerConfig.from_settings(ui_settings))


@pytest.fixture
def search_page(page_context: PageContext) -> SearchPage:
    return SearchPage(page_context)


@pytest.fixture
def itinerary_page(page_context: PageContext) -> ItineraryPage:
    return ItineraryPage(page_context)


@pytest.fixture
def booking_page(page_context: PageContext) -> BookingPage:
    return BookingPage(page_context)


@pytest.fixture
def search_criteria() -> dict:
    """Search used by the smoke scenarios."""
    return {
        "destination": "The Bahamas",
        "duration": "6 - 9 Days",
    }


@pytest_asyncio.fixture(loop_scope="session")
async def searched_page(search_page: SearchPage, search_criteria: dict) -> SearchPage:
    """Site opened with consent given and a search performed."""
    with allure.step(
        f"Search cruises to {search_criteria['destination']} "
        f"lasting {search_criteria['duration']}"
    ):
        attach_json(search_criteria, name="Search criteria")
        await search_page.navigate_to()
        await search_page.choose_sail_to_by_city_name(search_criteria["destination"])
        await search_page.choose_duration_by_option(search_criteria["duration"])
        await search_page.click_search_button()
    return search_page


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Keep each phase's report on the item so fixtures can read the outcome."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


def scenario_title(item) -> str:
    """Human title of a test: first docstring line, else the node name."""
    doc = getattr(item, "function", None) and item.function.__doc__
    if doc and doc.strip():
        return doc.strip().splitlines()[0]
    return item.name


def _test_passed(item) -> bool:
    setup = getattr(item, "rep_setup", None)
    call = getattr(item, "rep_call", None)
    if setup is not None and setup.failed:
        return False
    return call is None or call.passed


@asynccontextmanager
async def open_page(context: BrowserContext, item) -> AsyncIterator[Page]:
    """Open a page for `item`; capture failure artifacts and always close it."""
    page = await context.new_page()
    try:
        yield page
    finally:
        try:
            if not _test_passed(item):
                await _capture_failure(page)
        finally:
            await page.close()


async def _capture_failure(page: Page) -> None:
    try:
        attach_screenshot(await page.screenshot(full_page=True), name="failure_screenshot")
        attach_text(page.url, name="Current URL")
    except PlaywrightError as e:
        # Log but don't fail teardown if capture fails
        logger.warning(f"Failed to capture screenshot on failure: {e}")
