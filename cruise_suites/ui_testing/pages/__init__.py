"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the cruise booking site.

Each page class receives a PageContext and encapsulates:
    - Element selectors
    - Page-specific actions
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .booking_page import BookingPage
from .itinerary_page import ItineraryPage
from .search_page import DurationOption, SearchPage

__all__ = [
    "BookingPage",
    "DurationOption",
    "ItineraryPage",
    "SearchPage",
]
