"""Controller: perform one CachedAction on a page."""

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from .errors import ActionExecutionError
from .models import CachedAction


class Controller:
    """Executes resolved actions against one Playwright page."""

    def __init__(self, page: Page):
        self.page = page

    async def execute(self, action: CachedAction) -> None:
        method = action.method
        args = action.arguments
        try:
            if action.selector is None:
                await self._page_level(action)
                return

            locator = self.page.locator(action.selector).first
            if method == "click":
                await locator.click()
            elif method == "fill":
                await locator.fill(args[0] if args else "")
            elif method == "type":
                await locator.press_sequentially(args[0] if args else "")
            elif method == "press":
                await locator.press(args[0] if args else "Enter")
            elif method == "select_option":
                await locator.select_option(args[0] if args else None)
            elif method == "check":
                await locator.check()
            elif method == "hover":
                await locator.hover()
            elif method == "scroll":
                await locator.scroll_into_view_if_needed()
            else:
                raise ActionExecutionError(action, "unsupported method")
        except PlaywrightError as e:
            raise ActionExecutionError(action, str(e)) from e

    async def _page_level(self, action: CachedAction) -> None:
        """Actions without a locator: keyboard presses."""
        if action.method != "press":
            raise ActionExecutionError(action, "only 'press' may run without a selector")
        key = action.arguments[0] if action.arguments else "Enter"
        await self.page.keyboard.press(key)
