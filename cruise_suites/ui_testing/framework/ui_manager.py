"""
================================================================================
UI Manager
================================================================================

Policy layer around single Playwright interactions.

Every operation applies the same knobs, carried by `UIOptions`:
    - force_timeout: settle delay (ms) applied after the action
    - timeout: max wait (ms) for the action itself
    - throw_error: re-raise the driver error instead of reporting it

Every operation returns an `ActionResult`. Failures are always logged with
the selector and error text; they are re-raised only when `throw_error` is
set, otherwise they are returned as a structured `ActionFailure`.

No operation retries the underlying action.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .config_loader import DEFAULT_TIMEOUT_MS, UISettings


T = TypeVar("T")

Selector = Union[str, Locator]


class FailureReason(str, Enum):
    """Why a wrapped interaction failed."""
    TIMEOUT = "timeout"
    ACTION_FAILED = "action_failed"


@dataclass(frozen=True)
class ActionFailure:
    """
    Structured failure of a wrapped interaction.

    Attributes:
        reason: TIMEOUT when the element never reached the target state,
            ACTION_FAILED when the driver rejected the interaction
        selector: Description of the element (None for page-level waits)
        message: Driver error text
        error: The original driver exception
    """
    reason: FailureReason
    selector: Optional[str]
    message: str
    error: Optional[BaseException] = None

    @classmethod
    def from_error(cls, selector: Optional[str], error: BaseException) -> "ActionFailure":
        reason = (
            FailureReason.TIMEOUT
            if isinstance(error, PlaywrightTimeoutError)
            else FailureReason.ACTION_FAILED
        )
        return cls(reason=reason, selector=selector, message=str(error), error=error)


@dataclass(frozen=True)
class ActionResult(Generic[T]):
    """Success value or structured failure of a wrapped interaction."""
    value: Optional[T] = None
    failure: Optional[ActionFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> Optional[T]:
        """Return the value, or raise the stored driver error."""
        if self.failure is not None:
            if self.failure.error is not None:
                raise self.failure.error
            raise RuntimeError(self.failure.message)
        return self.value


@dataclass(frozen=True)
class UIOptions:
    """
    Per-call options. Unset fields fall back to the operation's defaults.

    Attributes:
        force_timeout: Settle delay in ms applied after the action
        timeout: Max wait in ms for the action; falls back to
            `UIManagerConfig.default_timeout`
        throw_error: Re-raise failures instead of returning them
    """
    force_timeout: Optional[int] = None
    timeout: Optional[int] = None
    throw_error: Optional[bool] = None

    def merged_with(self, defaults: "UIOptions") -> "UIOptions":
        return UIOptions(
            force_timeout=defaults.force_timeout if self.force_timeout is None else self.force_timeout,
            timeout=defaults.timeout if self.timeout is None else self.timeout,
            throw_error=defaults.throw_error if self.throw_error is None else self.throw_error,
        )


@dataclass(frozen=True)
class UIManagerConfig:
    """Environment-level settings for UIManager."""
    default_timeout: int = DEFAULT_TIMEOUT_MS

    @classmethod
    def from_settings(cls, settings: UISettings) -> "UIManagerConfig":
        return cls(default_timeout=settings.default_timeout)


def new_tab_modifiers() -> List[str]:
    """Modifier that makes a link click open a new tab on this platform."""
    return ["Meta"] if sys.platform == "darwin" else ["Control"]


class UIManager:
    """
    Uniform timeout/settle/log/raise-or-report policy for element interactions.

    Usage:
        ui = UIManager(page, UIManagerConfig(default_timeout=20000))
        await ui.click("a#cdc-destinations")
        visible = (await ui.is_visible("[data-testid='startBooking']")).value
        await ui.wait_for_page_settled(options=UIOptions(force_timeout=2000))
    """

    CLICK_DEFAULTS = UIOptions(force_timeout=150, throw_error=True)
    NEW_TAB_DEFAULTS = UIOptions(force_timeout=150, throw_error=True)
    WAIT_DEFAULTS = UIOptions(force_timeout=150, throw_error=False)
    PAGE_SETTLED_DEFAULTS = UIOptions(force_timeout=550, throw_error=False)
    CHECK_DEFAULTS = UIOptions(force_timeout=150, throw_error=False)

    def __init__(self, page: Page, config: Optional[UIManagerConfig] = None):
        """
        Args:
            page: Playwright page all interactions run against
            config: Environment settings; `default_timeout` applies to every
                call that does not set `options.timeout`
        """
        self.page = page
        self.config = config or UIManagerConfig()

    # =========================================================================
    # Actions
    # =========================================================================

    async def click(
        self,
        selector: Selector,
        *,
        options: Optional[UIOptions] = None,
    ) -> ActionResult[None]:
        """
        Click an element, then pause for the settle delay.

        Raises:
            playwright Error: When the click fails and `throw_error` is set
                (the default for this operation)
        """
        opts = self._resolve(options, self.CLICK_DEFAULTS)
        timeout = self._effective_timeout(opts)

        try:
            await self._click(selector, timeout)
            await self.page.wait_for_timeout(opts.force_timeout)
        except PlaywrightError as e:
            logger.error(
                f"Failed to click on the element with locator: "
                f"{self._describe(selector)}. Error: {e}"
            )
            if opts.throw_error:
                raise
            return ActionResult(failure=ActionFailure.from_error(self._describe(selector), e))

        return ActionResult()

    async def click_opening_new_tab(
        self,
        selector: Selector,
        *,
        options: Optional[UIOptions] = None,
    ) -> ActionResult[Page]:
        """
        Modifier-click a link and return the tab it opens.

        The context's `page` event and the click are awaited together; the new
        tab is returned once both resolved and it reached `domcontentloaded`.
        """
        opts = self._resolve(options, self.NEW_TAB_DEFAULTS)
        timeout = self._effective_timeout(opts)

        new_tab_event = asyncio.ensure_future(
            self.page.context.wait_for_event("page", timeout=timeout)
        )
        click = asyncio.ensure_future(
            self._click(selector, timeout, modifiers=new_tab_modifiers())
        )
        try:
            new_tab, _ = await asyncio.gather(new_tab_event, click)
            await new_tab.wait_for_load_state("domcontentloaded", timeout=timeout)
            await self.page.wait_for_timeout(opts.force_timeout)
        except PlaywrightError as e:
            # Neither half may outlive the call
            for task in (new_tab_event, click):
                task.cancel()
            await asyncio.gather(new_tab_event, click, return_exceptions=True)
            logger.error(
                f"Failed to open a new tab with locator: "
                f"{self._describe(selector)}. Error: {e}"
            )
            if opts.throw_error:
                raise
            return ActionResult(failure=ActionFailure.from_error(self._describe(selector), e))

        logger.info(f"New tab opened from '{self._describe(selector)}': {new_tab.url}")
        return ActionResult(value=new_tab)

    # =========================================================================
    # Waits
    # =========================================================================

    async def wait(self, *, options: Optional[UIOptions] = None) -> ActionResult[None]:
        """Unconditional settle delay of `force_timeout` ms."""
        opts = self._resolve(options, self.WAIT_DEFAULTS)

        try:
            logger.debug(f"Waiting for {opts.force_timeout} milliseconds...")
            await self.page.wait_for_timeout(opts.force_timeout)
            logger.debug(f"Wait of {opts.force_timeout} milliseconds completed.")
        except PlaywrightError as e:
            logger.error(f"Failed to wait for {opts.force_timeout} milliseconds. Error: {e}")
            if opts.throw_error:
                raise
            return ActionResult(failure=ActionFailure.from_error(None, e))

        return ActionResult()

    async def wait_for_page_settled(
        self,
        *,
        options: Optional[UIOptions] = None,
    ) -> ActionResult[bool]:
        """
        Wait for network-idle, dom-content-loaded and load, then settle.

        Network-idle is best-effort: a timeout there is logged and skipped,
        and only propagates (as the network-idle error itself) when
        `throw_error` is set. The result value tells whether network-idle
        was reached.
        """
        opts = self._resolve(options, self.PAGE_SETTLED_DEFAULTS)
        timeout = self._effective_timeout(opts)
        logger.debug(f"Effective timeout '{timeout}'...")

        network_idle = True
        try:
            await self.page.wait_for_load_state("networkidle", timeout=timeout)
            logger.debug("'networkidle' state reached.")
        except PlaywrightError as e:
            network_idle = False
            logger.warning(f"'networkidle' not reached in {timeout}ms. Continuing... ({e})")
            if opts.throw_error:
                raise

        try:
            for state in ("domcontentloaded", "load"):
                await self.page.wait_for_load_state(state, timeout=timeout)
                logger.debug(f"'{state}' state reached.")
        except PlaywrightError as e:
            logger.error(f"Failed during page load wait. Error: {e}")
            if opts.throw_error:
                raise
            return ActionResult(value=network_idle, failure=ActionFailure.from_error(None, e))

        settle = await self.wait(
            options=UIOptions(force_timeout=opts.force_timeout, throw_error=opts.throw_error)
        )
        if not settle.ok:
            return ActionResult(value=network_idle, failure=settle.failure)

        logger.info("Page settled with all load states and force timeout applied.")
        return ActionResult(value=network_idle)

    # =========================================================================
    # Checks
    # =========================================================================

    async def is_visible(
        self,
        selector: Selector,
        *,
        options: Optional[UIOptions] = None,
    ) -> ActionResult[bool]:
        """
        Check that an element becomes visible within the timeout.

        The value is False when it did not. The settle delay always runs.
        """
        opts = self._resolve(options, self.CHECK_DEFAULTS)
        timeout = self._effective_timeout(opts)

        try:
            await self._wait_for(selector, "visible", timeout)
            logger.info(f"Element located by '{self._describe(selector)}' is visible.")
            return ActionResult(value=True)
        except PlaywrightError as e:
            logger.warning(
                f"Element located by '{self._describe(selector)}' is not visible. Error: {e}"
            )
            if opts.throw_error:
                raise
            return ActionResult(
                value=False,
                failure=ActionFailure.from_error(self._describe(selector), e),
            )
        finally:
            if opts.force_timeout > 0:
                await self.wait(options=UIOptions(force_timeout=opts.force_timeout))

    async def is_enabled(
        self,
        selector: Selector,
        *,
        options: Optional[UIOptions] = None,
    ) -> ActionResult[bool]:
        """
        Check that an element exists and is not disabled.

        The value is False when the element is disabled or could not be
        found. The settle delay always runs.
        """
        opts = self._resolve(options, self.CHECK_DEFAULTS)
        timeout = self._effective_timeout(opts)

        try:
            disabled = await self._evaluate_disabled(selector, timeout)
            enabled = not disabled
            logger.info(
                f"Element located by '{self._describe(selector)}' is "
                f"{'enabled' if enabled else 'disabled'}."
            )
            return ActionResult(value=enabled)
        except PlaywrightError as e:
            logger.warning(
                f"Element located by '{self._describe(selector)}' could not be "
                f"checked for enabled state. Error: {e}"
            )
            if opts.throw_error:
                raise
            return ActionResult(
                value=False,
                failure=ActionFailure.from_error(self._describe(selector), e),
            )
        finally:
            if opts.force_timeout > 0:
                await self.wait(options=UIOptions(force_timeout=opts.force_timeout))

    # =========================================================================
    # Internals
    # =========================================================================

    def _resolve(self, options: Optional[UIOptions], defaults: UIOptions) -> UIOptions:
        return (options or UIOptions()).merged_with(defaults)

    def _effective_timeout(self, options: UIOptions) -> int:
        return options.timeout or self.config.default_timeout

    async def _click(
        self,
        selector: Selector,
        timeout: int,
        modifiers: Optional[List[str]] = None,
    ) -> None:
        kwargs: Dict[str, Any] = {"timeout": timeout}
        if modifiers:
            kwargs["modifiers"] = modifiers

        if isinstance(selector, Locator):
            await selector.click(**kwargs)
        else:
            await self.page.click(selector, **kwargs)

    async def _wait_for(self, selector: Selector, state: str, timeout: int) -> None:
        if isinstance(selector, Locator):
            await selector.wait_for(state=state, timeout=timeout)
        else:
            await self.page.wait_for_selector(selector, state=state, timeout=timeout)

    async def _evaluate_disabled(self, selector: Selector, timeout: int) -> bool:
        if isinstance(selector, Locator):
            await selector.wait_for(state="attached", timeout=timeout)
            return bool(await selector.evaluate("el => el.disabled"))

        handle = await self.page.wait_for_selector(selector, state="attached", timeout=timeout)
        return bool(await handle.evaluate("el => el.disabled"))

    @staticmethod
    def _describe(selector: Selector) -> str:
        return selector if isinstance(selector, str) else repr(selector)


__all__ = [
    "ActionFailure",
    "ActionResult",
    "FailureReason",
    "Selector",
    "UIManager",
    "UIManagerConfig",
    "UIOptions",
    "new_tab_modifiers",
]
