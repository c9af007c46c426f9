"""Planner: ask the LLM which element(s) an instruction refers to."""

import json
import logging
from typing import Dict, List, Optional

from openai import AsyncOpenAI

from .models import CachedAction, ElementSnapshot, PlannerCandidate

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = ("click", "fill", "type", "press", "select_option", "check", "hover", "scroll")

SYSTEM_PROMPT = (
    "You are the element locator of a web automation agent.\n"
    "Given ONE user instruction and the list of interactive elements on the current page, "
    "return the element(s) the instruction refers to and the operation to perform on them, "
    "best match first.\n"
    "You must output a JSON object and nothing else, shaped like this:\n"
    "{\n"
    "  \"candidates\": [\n"
    "    {\n"
    "      \"element_id\": 3,\n"
    "      \"method\": \"click|fill|type|press|select_option|check|hover|scroll\",\n"
    "      \"arguments\": [\"text to type, key to press or option to select\"],\n"
    "      \"description\": \"short description of the element\"\n"
    "    }\n"
    "  ]\n"
    "}\n"
    "Rules:\n"
    "1. For keyboard instructions (e.g. 'Press the down arrow key') use method 'press' with the "
    "Playwright key name (e.g. 'ArrowDown') and element_id null unless a specific element must have focus.\n"
    "2. For text entry use method 'fill' with the exact text as the only argument.\n"
    "3. If no element matches, return {\"candidates\": []}."
)


def _element_id(value) -> Optional[int]:
    """Element ids may come back as numeric strings."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


class Planner:
    """Resolves an instruction into candidate actions using an OpenAI-compatible model."""

    def __init__(self, client: AsyncOpenAI, model: str):
        self.client = client
        self.model = model

    async def propose(self, instruction: str, dom_summary: str) -> List[PlannerCandidate]:
        user_prompt = (
            f"Instruction: {instruction}\n\n"
            f"Interactive elements:\n{dom_summary}\n\n"
            "Return the matching candidates."
        )
        response = await self.client.chat.completions.create(
            model=self.model,
            temperature=0,
            response_format={"type": "json_object"},
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": user_prompt},
            ],
        )
        output_str = response.choices[0].message.content or ""
        try:
            data = json.loads(output_str)
        except json.JSONDecodeError as e:
            logger.error("Planner returned invalid JSON (%s): %r", e, output_str)
            return []
        if not isinstance(data, dict):
            logger.error("Planner returned a non-object JSON value: %r", output_str)
            return []
        items = data.get("candidates")
        if not isinstance(items, list):
            return []

        candidates = []
        for item in items:
            if not isinstance(item, dict):
                continue
            candidates.append(
                PlannerCandidate(
                    element_id=_element_id(item.get("element_id")),
                    method=str(item.get("method") or "click"),
                    arguments=[str(a) for a in item.get("arguments") or []],
                    description=str(item.get("description") or ""),
                )
            )
        return candidates

    async def resolve(
        self, instruction: str, dom_summary: str, snapshots: List[ElementSnapshot]
    ) -> List[CachedAction]:
        """Turn LLM candidates into replayable actions, dropping unusable ones."""
        by_id: Dict[int, ElementSnapshot] = {s.id: s for s in snapshots}
        actions = []
        for cand in await self.propose(instruction, dom_summary):
            if cand.method not in SUPPORTED_METHODS:
                logger.warning("Dropping candidate with unsupported method %r", cand.method)
                continue
            if cand.element_id is None:
                if cand.method != "press":
                    continue
                actions.append(CachedAction(None, cand.method, cand.arguments, cand.description))
                continue
            snap = by_id.get(cand.element_id)
            if snap is None:
                logger.warning("Dropping candidate for unknown element id %s", cand.element_id)
                continue
            actions.append(
                CachedAction(
                    selector=f"xpath={snap.xpath}",
                    method=cand.method,
                    arguments=cand.arguments,
                    description=cand.description or snap.label,
                )
            )
        return actions
