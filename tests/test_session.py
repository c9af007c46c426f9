"""Tests for BrowserSession timeout mapping and first-session ownership in runs."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from rera_agent import runs
from rera_agent.errors import StepTimeout
from rera_agent.session import BrowserSession

from tests.conftest import FakeSession


@pytest.fixture
def session(settings):
    session = BrowserSession(settings)
    session.page = MagicMock()
    session.page.goto = AsyncMock(side_effect=PlaywrightTimeoutError("x"))
    session.page.wait_for_selector = AsyncMock(side_effect=PlaywrightTimeoutError("x"))
    return session


class TestTimeoutMapping:

    @pytest.mark.asyncio
    async def test_navigation_timeout(self, session):
        with pytest.raises(StepTimeout) as excinfo:
            await session.navigate("https://rera.karnataka.gov.in/viewAllProjects", 600_000)
        assert excinfo.value.timeout_ms == 600_000
        assert isinstance(excinfo.value.__cause__, PlaywrightTimeoutError)

    @pytest.mark.asyncio
    async def test_selector_timeout(self, session):
        with pytest.raises(StepTimeout) as excinfo:
            await session.wait_for_selector_text("Land Details", 5_000)
        assert excinfo.value.timeout_ms == 5_000
        session.page.wait_for_selector.assert_awaited_once_with("text=Land Details", timeout=5_000)

    @pytest.mark.asyncio
    async def test_dispose_without_initialize(self, settings):
        await BrowserSession(settings).dispose()


class RecordingSession(FakeSession):
    instances = []

    def __init__(self, settings):
        super().__init__()
        RecordingSession.instances.append(self)


class FailingStartSession(RecordingSession):
    async def initialize(self):
        await super().initialize()
        raise OSError("chromium did not launch")


class TestRunOwnership:

    @pytest.fixture(autouse=True)
    def _reset(self):
        RecordingSession.instances = []

    async def _pipeline(self, session, act, target, logger):
        return {"landDetails": [], "documents": []}

    @pytest.mark.asyncio
    async def test_first_session_disposed_by_run(self, monkeypatch, settings):
        monkeypatch.setattr(runs, "BrowserSession", RecordingSession)

        outcomes = await runs._run(["T1", "T2"], settings, self._pipeline, lambda o, l: None)

        assert [o.ok for o in outcomes] == [True, True]
        first, second = RecordingSession.instances
        assert (first.initialized, first.disposed) == (1, 1)
        assert (second.initialized, second.disposed) == (1, 1)

    @pytest.mark.asyncio
    async def test_first_session_disposed_when_start_fails(self, monkeypatch, settings):
        monkeypatch.setattr(runs, "BrowserSession", FailingStartSession)

        with pytest.raises(OSError):
            await runs._run(["T1"], settings, self._pipeline, lambda o, l: None)

        assert RecordingSession.instances[0].disposed == 1
