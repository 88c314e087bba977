"""
================================================================================
Itinerary Page Object (Async / Playwright)
================================================================================

Day-by-day itinerary of one sail, reached from a search result.

================================================================================
"""

from __future__ import annotations

import allure

from cruise_suites.ui_testing.framework.page_base import PageContext
from cruise_suites.ui_testing.framework.ui_manager import UIOptions


class ItineraryPage:
    """Itinerary page object (async)."""

    DAY_TILE_CONTENT = "[data-testid='dayTileContent']"
    START_BOOKING = "[data-testid='startBooking']"
    START_BOOKING_LINK = "[data-testid='startBooking'] a"

    START_BOOKING_SETTLE_MS = 3000

    def __init__(self, ctx: PageContext):
        self.ctx = ctx
        self.page = ctx.page
        self.ui = ctx.ui

    async def is_days_info_enabled(self) -> bool:
        return bool((await self.ui.is_enabled(self.DAY_TILE_CONTENT)).value)

    async def is_start_booking_displayed(self) -> bool:
        return bool((await self.ui.is_visible(self.START_BOOKING)).value)

    async def click_start_booking(self) -> None:
        with allure.step("Start booking"):
            await self.ui.click(self.START_BOOKING_LINK)
            await self.ui.wait_for_page_settled(
                options=UIOptions(force_timeout=self.START_BOOKING_SETTLE_MS)
            )
