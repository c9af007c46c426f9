"""Tests for the run orchestrator: isolation, session lifecycle and persistence."""

import asyncio

import pytest

from rera_agent.executor import CachedActionExecutor
from rera_agent.orchestrator import RunOrchestrator, validate_targets
from rera_agent.persistence import persist_land_and_documents

from tests.conftest import FakeSession

RESULT = {
    "landDetails": [{"surveyNumber": "S1", "field": "Type of Land", "value": "Residential"}],
    "documents": [],
}


class Harness:
    def __init__(self, cache, fail_targets=()):
        self.first = FakeSession()
        self.created = []
        self.fail_targets = set(fail_targets)
        self.orchestrator = RunOrchestrator(self.first, self.factory, CachedActionExecutor(cache, draw_overlays=False))

    def factory(self):
        session = FakeSession()
        self.created.append(session)
        return session

    async def pipeline(self, session, act, target, logger):
        await act(f"Enter text '{target}' in the project name input field")
        await asyncio.sleep(0)
        if target in self.fail_targets:
            raise RuntimeError(f"portal broke on {target}")
        return RESULT


class TestRunOrchestrator:

    @pytest.mark.asyncio
    async def test_failure_is_isolated(self, cache, tmp_path):
        harness = Harness(cache, fail_targets={"T2"})
        outcomes = await harness.orchestrator.run(
            ["T1", "T2", "T3"],
            harness.pipeline,
            lambda outcome, logger: persist_land_and_documents(outcome, tmp_path, logger),
        )

        assert [o.target for o in outcomes] == ["T1", "T2", "T3"]
        assert [o.ok for o in outcomes] == [True, False, True]
        assert outcomes[0].result == RESULT
        assert isinstance(outcomes[1].error, RuntimeError)
        assert outcomes[1].result is None
        assert (tmp_path / "json" / "t1_land_details.json").exists()
        assert (tmp_path / "json" / "t3_land_details.json").exists()
        assert not (tmp_path / "json" / "t2_land_details.json").exists()

    @pytest.mark.asyncio
    async def test_session_lifecycle(self, cache):
        harness = Harness(cache, fail_targets={"T3"})
        await harness.orchestrator.run(["T1", "T2", "T3", "T4"], harness.pipeline, lambda o, l: None)

        assert len(harness.created) == 3
        assert sum(s.initialized for s in harness.created) == 3
        assert sum(s.disposed for s in harness.created) == 3
        assert harness.first.initialized == 0
        assert harness.first.disposed == 0

    @pytest.mark.asyncio
    async def test_single_target_uses_first_session_only(self, cache):
        harness = Harness(cache)
        outcomes = await harness.orchestrator.run(["T1"], harness.pipeline, lambda o, l: None)

        assert harness.created == []
        assert len(harness.first.executed) == 1
        assert outcomes[0].ok

    @pytest.mark.asyncio
    async def test_each_target_drives_its_own_session(self, cache):
        harness = Harness(cache)
        await harness.orchestrator.run(["T1", "T2"], harness.pipeline, lambda o, l: None)

        assert [a.description for a in harness.first.executed] == ["Enter text 'T1' in the project name input field"]
        assert [a.description for a in harness.created[0].executed] == [
            "Enter text 'T2' in the project name input field"
        ]

    @pytest.mark.asyncio
    async def test_failed_initialization_is_a_target_failure(self, cache):
        harness = Harness(cache)

        class BrokenSession(FakeSession):
            async def initialize(self):
                raise OSError("browser did not start")

        broken = BrokenSession()
        harness.orchestrator.session_factory = lambda: broken
        outcomes = await harness.orchestrator.run(["T1", "T2"], harness.pipeline, lambda o, l: None)

        assert [o.ok for o in outcomes] == [True, False]
        assert broken.disposed == 1

    @pytest.mark.asyncio
    async def test_persistence_failure_does_not_stop_others(self, cache):
        harness = Harness(cache)
        persisted = []

        def persist(outcome, logger):
            if outcome.target == "T1":
                raise OSError("disk full")
            persisted.append(outcome.target)

        outcomes = await harness.orchestrator.run(["T1", "T2"], harness.pipeline, persist)

        assert persisted == ["T2"]
        assert all(o.ok for o in outcomes)

    @pytest.mark.asyncio
    async def test_malformed_target_list_raises_before_any_session(self, cache):
        harness = Harness(cache)
        with pytest.raises(ValueError):
            await harness.orchestrator.run("T1", harness.pipeline, lambda o, l: None)
        with pytest.raises(ValueError):
            await harness.orchestrator.run(["T1", ""], harness.pipeline, lambda o, l: None)
        assert harness.first.executed == []
        assert harness.created == []


def test_validate_targets_accepts_tuples():
    assert validate_targets(("a", "b")) == ["a", "b"]


class TestConcurrency:

    @pytest.mark.asyncio
    async def test_targets_run_concurrently(self, cache):
        harness = Harness(cache)
        t2_started = asyncio.Event()

        async def pipeline(session, act, target, logger):
            if target == "T1":
                await t2_started.wait()
            else:
                t2_started.set()
            return RESULT

        outcomes = await asyncio.wait_for(
            harness.orchestrator.run(["T1", "T2"], pipeline, lambda o, l: None), timeout=2
        )

        assert [o.ok for o in outcomes] == [True, True]

