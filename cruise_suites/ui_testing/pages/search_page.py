"""
================================================================================
Search Page Object (Async / Playwright)
================================================================================

Cruise search form on the site root and the results grid it leads to.

Highlights:
  - Destination and duration pickers driven by aria-label matches
  - Read-only checks return booleans and never raise
  - Footer "contact support" link opens in a new tab

================================================================================
"""

from __future__ import annotations

from typing import Literal, Optional

import allure
from loguru import logger
from playwright.async_api import Page

from cruise_suites.ui_testing.framework.page_base import PageContext
from cruise_suites.ui_testing.framework.ui_manager import UIOptions


DurationOption = Literal["2 - 5 Days", "6 - 9 Days", "10+ Days"]


class SearchPage:
    """Search page object (async)."""

    DESTINATIONS_TOGGLE = "a#cdc-destinations"
    DURATIONS_TOGGLE = "a#cdc-durations"
    SEARCH_BUTTON = "li a[data-tealium='cdc-search-cruises-cta']"
    RESULT_GRID = 'div#mainContent [data-testid="tripTilesContainer"]'
    BUDGET_FILTER = "[aria-label='Vacation Budget']"
    PRICE_SLIDER = "span[data-testid='pricingSlider']"
    SORT_SELECT = '[data-testid="sortBySelect"]'
    FIRST_VIEW_ITINERARY = "xpath=(//a[text()='View Itinerary'])[1]"
    CONTACT_SUPPORT_LINK = "[data-testid='footerCategoryItem3'] a[data-testid='link-item-url-1']"

    SEARCH_SETTLE_MS = 2000
    SAIL_SELECTION_SETTLE_MS = 5000

    def __init__(self, ctx: PageContext):
        self.ctx = ctx
        self.page = ctx.page
        self.ui = ctx.ui

    @staticmethod
    def option_button(label: str) -> str:
        """Picker option whose aria-label contains `label`."""
        return f"button[aria-label*='{label}']"

    async def navigate_to(self, agree_action: bool = True) -> "SearchPage":
        await self.ctx.navigator.navigate_to(agree_action)
        return self

    async def choose_sail_to_by_city_name(self, city_name: str) -> None:
        with allure.step(f"Choose destination: {city_name}"):
            await self.ui.click(self.DESTINATIONS_TOGGLE)
            await self.ui.click(self.option_button(city_name))

    async def choose_duration_by_option(self, duration_option: DurationOption = "6 - 9 Days") -> None:
        with allure.step(f"Choose duration: {duration_option}"):
            await self.ui.click(self.DURATIONS_TOGGLE)
            await self.ui.click(self.option_button(duration_option))
        logger.info(f"Selected duration filter: {duration_option}")

    async def click_search_button(self) -> None:
        with allure.step("Search cruises"):
            await self.ui.click(self.SEARCH_BUTTON)
            await self.ui.wait_for_page_settled(options=UIOptions(force_timeout=self.SEARCH_SETTLE_MS))

    async def filter_by_price(self) -> None:
        """Open the budget filter, touch the price slider and close the filter."""
        with allure.step("Open the vacation budget filter"):
            await self.ui.click(self.page.get_by_label("Vacation Budget"))
            await self.ui.click(self.page.get_by_test_id("pricingSlider"))
            await self.ui.click(
                self.page.get_by_test_id("pricingFilterButton").get_by_label("Vacation Budget")
            )

    async def is_result_grid_displayed(self) -> bool:
        return bool((await self.ui.is_visible(self.RESULT_GRID)).value)

    async def is_filter_its_slider_bar_enabled(self) -> bool:
        """Open the budget filter and check its price slider is enabled."""
        await self.ui.click(self.BUDGET_FILTER, options=UIOptions(throw_error=False))
        return bool((await self.ui.is_enabled(self.PRICE_SLIDER)).value)

    async def is_cheapest_first_option_default(self) -> bool:
        return bool((await self.ui.is_visible(self.SORT_SELECT)).value)

    async def select_first_sail(self) -> None:
        with allure.step("Select the first sail"):
            await self.ui.click(self.FIRST_VIEW_ITINERARY)
            await self.ui.wait(options=UIOptions(force_timeout=self.SAIL_SELECTION_SETTLE_MS))

    async def is_contact_support_link_visible(self) -> bool:
        return bool((await self.ui.is_visible(self.CONTACT_SUPPORT_LINK)).value)

    async def click_contact_support_link(self) -> Optional[Page]:
        """Returns the support tab, or None when it did not open."""
        with allure.step("Open contact support in a new tab"):
            result = await self.ui.click_opening_new_tab(
                self.CONTACT_SUPPORT_LINK,
                options=UIOptions(throw_error=False),
            )
        return result.value
