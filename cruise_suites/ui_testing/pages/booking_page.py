"""
================================================================================
Booking Page Object (Async / Playwright)
================================================================================

First step of the booking flow (stateroom selection).

================================================================================
"""

from __future__ import annotations

from cruise_suites.ui_testing.framework.page_base import PageContext


class BookingPage:
    """Booking page object (async)."""

    ITINERARY_CONTAINER = "[data-testid='itineraryContainer']"
    STATEROOM_QUESTION = "[data-testid='cabinsPanel2021Section']"

    def __init__(self, ctx: PageContext):
        self.ctx = ctx
        self.page = ctx.page
        self.ui = ctx.ui

    async def is_booking_page_visible(self) -> bool:
        return bool((await self.ui.is_visible(self.ITINERARY_CONTAINER)).value)

    async def is_stateroom_question_visible(self) -> bool:
        return bool((await self.ui.is_visible(self.STATEROOM_QUESTION)).value)
