"""Visual overlay: outline resolved elements so a watcher can see what was picked.

Purely advisory; nothing downstream depends on it.
"""

from typing import List

from playwright.async_api import Page

from .models import CachedAction

DRAW_JS = """
(xpaths) => {
    for (const xpath of xpaths) {
        const el = document.evaluate(
            xpath, document, null, XPathResult.FIRST_ORDERED_NODE_TYPE, null
        ).singleNodeValue;
        if (!el) continue;
        const rect = el.getBoundingClientRect();
        const box = document.createElement('div');
        box.className = 'rera-agent-overlay';
        box.style.position = 'fixed';
        box.style.left = rect.left + 'px';
        box.style.top = rect.top + 'px';
        box.style.width = rect.width + 'px';
        box.style.height = rect.height + 'px';
        box.style.border = '2px solid #ffcc00';
        box.style.background = 'rgba(255, 204, 0, 0.25)';
        box.style.pointerEvents = 'none';
        box.style.zIndex = '2147483647';
        document.body.appendChild(box);
    }
}
"""

CLEAR_JS = """
() => {
    document.querySelectorAll('.rera-agent-overlay').forEach(el => el.remove());
}
"""


def _xpaths(actions: List[CachedAction]) -> List[str]:
    return [
        a.selector[len("xpath="):]
        for a in actions
        if a.selector and a.selector.startswith("xpath=")
    ]


async def draw_overlay(page: Page, actions: List[CachedAction]) -> None:
    xpaths = _xpaths(actions)
    if xpaths:
        await page.evaluate(DRAW_JS, xpaths)


async def clear_overlay(page: Page) -> None:
    await page.evaluate(CLEAR_JS)
