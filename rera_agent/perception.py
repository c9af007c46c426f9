"""Perception: snapshot the visible interactive elements of a page."""

from typing import List, Tuple

from playwright.async_api import Page

from .models import ElementSnapshot

# Each element gets an absolute XPath so a resolved action can be replayed
# in a later session without re-running perception.
SNAPSHOT_JS = """
() => {
    const isVisible = (el) => {
        const style = window.getComputedStyle(el);
        const rect = el.getBoundingClientRect();
        if (style.display === 'none') return false;
        if (style.visibility === 'hidden') return false;
        if (parseFloat(style.opacity) === 0) return false;
        if (rect.width <= 0 || rect.height <= 0) return false;
        return true;
    };

    const isInteractive = (el) => {
        if (el.tagName === 'INPUT') {
            const type = (el.getAttribute('type') || '').toLowerCase();
            if (type === 'hidden') return false;
        }
        if (el.tagName === 'A') {
            return el.hasAttribute('href') || el.getAttribute('role') === 'button'
                || el.hasAttribute('onclick') || el.hasAttribute('data-toggle');
        }
        return true;
    };

    const xpathOf = (el) => {
        const parts = [];
        let node = el;
        while (node && node.nodeType === Node.ELEMENT_NODE) {
            let index = 1;
            let sibling = node.previousElementSibling;
            while (sibling) {
                if (sibling.tagName === node.tagName) index += 1;
                sibling = sibling.previousElementSibling;
            }
            parts.unshift(node.tagName.toLowerCase() + '[' + index + ']');
            node = node.parentElement;
        }
        return '/' + parts.join('/');
    };

    const getLabel = (el) => {
        const candidates = [
            (el.innerText || '').trim(),
            (el.value || '').trim(),
            el.getAttribute('placeholder') || '',
            el.getAttribute('aria-label') || '',
            el.getAttribute('title') || '',
            el.getAttribute('alt') || '',
            el.getAttribute('name') || '',
            el.className && typeof el.className === 'string' ? 'class: ' + el.className : '',
        ];
        const chosen = candidates.find(c => c.length > 0);
        return (chosen || '(no text)').slice(0, 80);
    };

    const getContext = (el) => {
        const fieldset = el.closest('fieldset');
        const legend = fieldset ? fieldset.querySelector('legend') : null;
        const label = el.id ? document.querySelector('label[for="' + el.id + '"]') : null;
        const parentText = (el.parentElement?.innerText || '').trim().split('\\n')[0];

        const parts = [];
        if (label) parts.push('label: ' + label.innerText.trim());
        if (legend) parts.push('legend: ' + legend.innerText.trim());
        if (parentText && parentText !== getLabel(el)) parts.push('parent: ' + parentText.slice(0, 40));
        return parts.length > 0 ? parts.join(' | ') : null;
    };

    const elements = [];
    let currentId = 0;
    const nodes = document.querySelectorAll(
        'button, a, input, textarea, select, [role="tab"], [role="button"], li > a, i[onclick]'
    );
    for (const el of nodes) {
        if (!isVisible(el)) continue;
        if (!isInteractive(el)) continue;

        currentId += 1;
        const bbox = el.getBoundingClientRect();
        elements.push({
            id: currentId,
            tag: el.tagName.toLowerCase(),
            role: el.getAttribute('role'),
            label: getLabel(el),
            xpath: xpathOf(el),
            input_type: el.getAttribute('type') || null,
            disabled: el.disabled || el.getAttribute('aria-disabled') === 'true',
            bbox: { x: bbox.x, y: bbox.y, width: bbox.width, height: bbox.height },
            context: getContext(el),
        });
    }
    return elements;
}
"""


class Perception:
    """Extracts interactive elements and renders them as an LLM-readable list."""

    async def extract_elements(self, page: Page) -> Tuple[List[ElementSnapshot], str]:
        items = await page.evaluate(SNAPSHOT_JS)
        snapshots = [ElementSnapshot(**item) for item in items]
        return snapshots, self.summarize(snapshots)

    def summarize(self, snapshots: List[ElementSnapshot]) -> str:
        if not snapshots:
            return "(no interactive elements on the page)"
        lines = []
        for snap in snapshots:
            role_str = f" role={snap.role}" if snap.role else ""
            type_str = f" type={snap.input_type}" if snap.input_type else ""
            context_str = f" ({snap.context})" if snap.context else ""
            disabled_str = " [DISABLED]" if snap.disabled else ""
            lines.append(
                f"[{snap.id}] {snap.tag}{role_str}{type_str}: \"{snap.label}\"{disabled_str}{context_str}"
            )
        return "\n".join(lines)
