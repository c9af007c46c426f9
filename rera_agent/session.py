"""One isolated browser session: page automation, element resolution and extraction."""

import asyncio
import json
from typing import List, Optional, Type, TypeVar

from openai import AsyncOpenAI
from playwright.async_api import Browser, Page, Playwright, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from pydantic import BaseModel

from .config import Settings
from .controller import Controller
from .errors import StepTimeout
from .extractor import Extractor
from .models import CachedAction
from .overlay import clear_overlay, draw_overlay
from .perception import Perception
from .planner import Planner

T = TypeVar("T", bound=BaseModel)

LINKS_JS = """
() => Array.from(document.querySelectorAll('a[href]')).map(a => ({
    text: (a.innerText || a.getAttribute('title') || '').trim(),
    href: a.getAttribute('href'),
}))
"""


class BrowserSession:
    """Owns one Playwright browser and page; never shared between targets."""

    def __init__(self, settings: Settings, client: Optional[AsyncOpenAI] = None):
        self.settings = settings
        self.client = client
        self.perception = Perception()
        self.planner: Optional[Planner] = None
        self.extractor: Optional[Extractor] = None
        self.controller: Optional[Controller] = None
        self.page: Optional[Page] = None
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    async def initialize(self) -> None:
        if self.client is None:
            if not self.settings.openai_api_key:
                raise ValueError("Set OPENAI_API_KEY, e.g. export OPENAI_API_KEY='sk-...'")
            self.client = AsyncOpenAI(
                api_key=self.settings.openai_api_key,
                base_url=self.settings.openai_base_url,
            )
        self.planner = Planner(self.client, self.settings.model)
        self.extractor = Extractor(self.client, self.settings.model)

        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(headless=self.settings.headless)
        context = await self._browser.new_context()
        self.page = await context.new_page()
        self.controller = Controller(self.page)

    async def dispose(self) -> None:
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
        self.page = None

    async def navigate(self, url: str, timeout_ms: int) -> None:
        try:
            await self.page.goto(url, timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise StepTimeout(f"navigation to {url}", timeout_ms) from e

    async def execute_action(self, action: CachedAction) -> None:
        await self.controller.execute(action)

    async def resolve_instruction(self, instruction: str) -> List[CachedAction]:
        snapshots, dom_summary = await self.perception.extract_elements(self.page)
        return await self.planner.resolve(instruction, dom_summary, snapshots)

    async def wait_for_network_idle(self) -> None:
        await self.page.wait_for_load_state("networkidle")

    async def wait_for_selector_text(self, text: str, timeout_ms: int) -> None:
        try:
            await self.page.wait_for_selector(f"text={text}", timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise StepTimeout(f"text {text!r}", timeout_ms) from e

    async def wait(self, ms: int) -> None:
        await asyncio.sleep(ms / 1000)

    async def extract_structured(self, instruction: str, schema: Type[T], use_text_extract: bool = True) -> T:
        """Extract from the visible page text, or from the page's links when
        ``use_text_extract`` is False (hrefs are not part of the text)."""
        if use_text_extract:
            content = await self.page.inner_text("body")
        else:
            links = await self.page.evaluate(LINKS_JS)
            content = json.dumps(links, ensure_ascii=False, indent=0)
        return await self.extractor.extract(instruction, content, schema)

    async def draw_overlay(self, actions: List[CachedAction]) -> None:
        await draw_overlay(self.page, actions)

    async def clear_overlay(self) -> None:
        await clear_overlay(self.page)
