"""Tests for RecoverableStep."""

import pytest

from rera_agent.errors import StepTimeout
from rera_agent.retry import RecoverableStep


class Script:
    """Check that fails ``failures`` times, plus a recover counter."""

    def __init__(self, failures, error=None):
        self.failures = failures
        self.error = error or StepTimeout("marker", 5000)
        self.checks = 0
        self.recoveries = 0

    async def check(self):
        self.checks += 1
        if self.checks <= self.failures:
            raise self.error

    async def recover(self):
        self.recoveries += 1


class TestRecoverableStep:

    @pytest.mark.asyncio
    async def test_success_on_first_attempt(self, target_logger):
        script = Script(failures=0)
        await RecoverableStep("tab", script.check, script.recover).run(target_logger)
        assert (script.checks, script.recoveries) == (1, 0)

    @pytest.mark.asyncio
    async def test_recovers_once_then_succeeds(self, target_logger):
        script = Script(failures=1)
        await RecoverableStep("tab", script.check, script.recover).run(target_logger)
        assert (script.checks, script.recoveries) == (2, 1)

    @pytest.mark.asyncio
    async def test_second_timeout_propagates(self, target_logger):
        script = Script(failures=2)
        with pytest.raises(StepTimeout):
            await RecoverableStep("tab", script.check, script.recover).run(target_logger)
        assert (script.checks, script.recoveries) == (2, 1)

    @pytest.mark.asyncio
    async def test_other_errors_are_not_retried(self, target_logger):
        script = Script(failures=1, error=RuntimeError("page crashed"))
        with pytest.raises(RuntimeError):
            await RecoverableStep("tab", script.check, script.recover).run(target_logger)
        assert (script.checks, script.recoveries) == (1, 0)

    @pytest.mark.asyncio
    async def test_single_attempt_never_recovers(self, target_logger):
        script = Script(failures=1)
        with pytest.raises(StepTimeout):
            await RecoverableStep("tab", script.check, script.recover, max_attempts=1).run(target_logger)
        assert script.recoveries == 0

    def test_zero_attempts_rejected(self):
        script = Script(failures=0)
        with pytest.raises(ValueError):
            RecoverableStep("tab", script.check, script.recover, max_attempts=0)
