"""Shared test fixtures: an in-memory stand-in for BrowserSession."""

import logging
from typing import Dict, List, Optional

import pytest

from rera_agent.cache import InstructionCache
from rera_agent.config import Settings
from rera_agent.errors import StepTimeout
from rera_agent.logging_utils import TargetLogger
from rera_agent.models import CachedAction


class FakeSession:
    """Records every call; resolution, markers and extraction payloads are scripted."""

    def __init__(
        self,
        resolutions: Optional[Dict[str, List[CachedAction]]] = None,
        extractions: Optional[Dict[type, dict]] = None,
        marker_failures: Optional[Dict[str, int]] = None,
    ):
        self.resolutions = resolutions or {}
        self.extractions = extractions or {}
        self.marker_failures = dict(marker_failures or {})
        self.events: List[tuple] = []
        self.executed: List[CachedAction] = []
        self.resolve_calls: List[str] = []
        self.initialized = 0
        self.disposed = 0

    async def initialize(self):
        self.initialized += 1

    async def dispose(self):
        self.disposed += 1

    async def navigate(self, url, timeout_ms):
        self.events.append(("navigate", url, timeout_ms))

    async def execute_action(self, action):
        self.executed.append(action)
        self.events.append(("execute", action.description))

    async def resolve_instruction(self, instruction):
        self.resolve_calls.append(instruction)
        if instruction in self.resolutions:
            return self.resolutions[instruction]
        return [CachedAction(f"xpath=//button[{len(self.resolve_calls)}]", "click", [], instruction)]

    async def wait_for_network_idle(self):
        self.events.append(("network_idle",))

    async def wait_for_selector_text(self, text, timeout_ms):
        self.events.append(("wait_for", text))
        if self.marker_failures.get(text, 0) > 0:
            self.marker_failures[text] -= 1
            raise StepTimeout(f"text {text!r}", timeout_ms)

    async def wait(self, ms):
        self.events.append(("wait", ms))

    async def extract_structured(self, instruction, schema, use_text_extract=True):
        self.events.append(("extract", schema.__name__, use_text_extract))
        return schema.model_validate(self.extractions.get(schema, {}))

    async def draw_overlay(self, actions):
        self.events.append(("draw_overlay", len(actions)))

    async def clear_overlay(self):
        self.events.append(("clear_overlay",))


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def cache(tmp_path):
    return InstructionCache(tmp_path / "cache.json")


@pytest.fixture
def target_logger():
    return TargetLogger(logging.getLogger("tests"), "test-target")


@pytest.fixture
def settings(tmp_path):
    return Settings(
        openai_api_key="sk-test",
        cache_path=tmp_path / "cache.json",
        output_dir=tmp_path / "scraped_data",
        project_details_path=tmp_path / "project_details.json",
        overlay_pause_ms=0,
        detail_settle_ms=0,
    )
