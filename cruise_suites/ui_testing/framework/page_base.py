"""
================================================================================
Page Object Foundation
================================================================================

Shared capabilities composed into every page object.

Provides:
    - SiteNavigator: open the site root and accept the consent banner
    - PageContext: the page, its UIManager and its navigator, built once per
      test and handed to each page object

Page objects do not inherit behaviour; they receive a PageContext and only
declare their own selectors and actions.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import allure
from loguru import logger
from playwright.async_api import Page

from .ui_manager import UIManager, UIManagerConfig, UIOptions


class SiteNavigator:
    """
    Navigation shared by all screens of the site.

    Usage:
        navigator = SiteNavigator(page, UIManager(page))
        await navigator.navigate_to()              # root + consent
        await navigator.navigate_to(agree_action=False)
    """

    ROOT_PATH = "/"
    AGREE_BUTTON_NAME = "AGREE"
    # The site renders search content late after consent is given
    CONSENT_SETTLE_MS = 2000

    def __init__(self, page: Page, ui: UIManager):
        self.page = page
        self.ui = ui

    async def navigate_to(self, agree_action: bool = True) -> None:
        """
        Load the site root relative to the context base URL and reload once.

        Args:
            agree_action: Click the consent banner's AGREE button afterwards
        """
        with allure.step(f"Open site root (agree_action={agree_action})"):
            await self.page.goto(self.ROOT_PATH)
            await self.page.reload()
            logger.debug(f"Navigated to: {self.page.url}")

            if agree_action:
                agree_button = self.page.get_by_role("button", name=self.AGREE_BUTTON_NAME)
                await self.ui.click(agree_button)
                await self.ui.wait(options=UIOptions(force_timeout=self.CONSENT_SETTLE_MS))


@dataclass
class PageContext:
    """Everything a page object needs to act on one browser tab."""
    page: Page
    ui: UIManager
    navigator: SiteNavigator

    @classmethod
    def create(cls, page: Page, config: Optional[UIManagerConfig] = None) -> "PageContext":
        ui = UIManager(page, config)
        return cls(page=page, ui=ui, navigator=SiteNavigator(page, ui))

    def for_tab(self, page: Page) -> "PageContext":
        """Context for another tab, sharing this context's UIManager settings."""
        return PageContext.create(page, self.ui.config)


__all__ = [
    "PageContext",
    "SiteNavigator",
]
