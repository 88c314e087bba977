"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation.

Features:
    - One browser instance per worker for performance
    - Context isolation per test
    - Browser/device profiles (chrome-desktop, firefox-desktop, chrome-mobile)
    - Base URL bound to every context so page objects navigate by path

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Playwright,
)

from .config_loader import BrowserProfile, UISettings


class BrowserManager:
    """
    Manages the browser instance and contexts for UI testing.

    Usage:
        async with BrowserManager(profile, settings) as manager:
            context = await manager.new_context()
            page = await context.new_page()
            await page.goto("/")
    """

    # Default browser launch options
    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
    }

    # Chromium-only flags
    CHROMIUM_ARGS = [
        "--ignore-certificate-errors",
    ]

    def __init__(
        self,
        profile: Optional[BrowserProfile] = None,
        settings: Optional[UISettings] = None,
    ):
        """
        Initialize browser manager.

        Args:
            profile: Browser/device profile; defaults to plain desktop Chromium
            settings: UI settings supplying base URL, headless mode and
                HTTPS error policy
        """
        self.profile = profile or BrowserProfile(name="chrome-desktop")
        self.settings = settings or UISettings()

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: list[BrowserContext] = []

    async def __aenter__(self) -> "BrowserManager":
        """Async context manager entry - start browser."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - close browser."""
        await self.close()

    async def start(self) -> None:
        """Start Playwright and launch the profile's browser."""
        self._playwright = await async_playwright().start()

        if self.profile.browser_type == "firefox":
            browser_launcher = self._playwright.firefox
        elif self.profile.browser_type == "webkit":
            browser_launcher = self._playwright.webkit
        else:
            browser_launcher = self._playwright.chromium

        launch_options = {
            **self.DEFAULT_LAUNCH_OPTIONS,
            "headless": self.settings.headless,
        }
        if self.profile.browser_type == "chromium":
            launch_options["args"] = list(self.CHROMIUM_ARGS)

        self._browser = await browser_launcher.launch(**launch_options)
        logger.debug(
            f"Browser started: {self.profile.name} ({self.profile.browser_type}, "
            f"headless={self.settings.headless})"
        )

    async def close(self) -> None:
        """Close all contexts and browser."""
        for context in self._contexts:
            try:
                await context.close()
            except PlaywrightError as e:
                logger.debug(f"Context already closed: {e}")
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    def context_options(self, **options: Any) -> Dict[str, Any]:
        """
        Build context options for the active profile.

        Device descriptor first, then viewport override, then run settings,
        then explicit options.
        """
        context_options: Dict[str, Any] = {}

        if self.profile.device:
            if not self._playwright:
                raise RuntimeError("Browser not started. Call start() first.")
            descriptor = dict(self._playwright.devices[self.profile.device])
            descriptor.pop("default_browser_type", None)
            context_options.update(descriptor)

        if self.profile.viewport:
            context_options["viewport"] = dict(self.profile.viewport)

        context_options["base_url"] = self.settings.base_url
        context_options["ignore_https_errors"] = self.settings.ignore_https_errors
        context_options.update(options)
        return context_options

    async def new_context(self, **options: Any) -> BrowserContext:
        """
        Create new browser context.

        Each context is isolated - separate cookies, localStorage, etc.

        Args:
            **options: Additional context options

        Returns:
            New BrowserContext
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context = await self._browser.new_context(**self.context_options(**options))
        self._contexts.append(context)
        return context

    async def release_context(self, context: BrowserContext) -> None:
        """Close a context created by this manager."""
        if context in self._contexts:
            self._contexts.remove(context)
        await context.close()


__all__ = [
    "BrowserManager",
]
