"""Bounded retry for page steps whose readiness is not deterministic."""

from dataclasses import dataclass
from typing import Awaitable, Callable, Tuple, Type

from .errors import StepTimeout
from .logging_utils import TargetLogger


@dataclass
class RecoverableStep:
    """A readiness check that may be re-attempted after a recovery action.

    ``check`` is awaited up to ``max_attempts`` times. Between attempts
    ``recover`` re-runs the action that should have produced the expected
    state (e.g. clicking a tab again). Errors outside ``retry_on`` are never
    retried; the error of the last attempt propagates.
    """
    name: str
    check: Callable[[], Awaitable[None]]
    recover: Callable[[], Awaitable[None]]
    max_attempts: int = 2
    retry_on: Tuple[Type[BaseException], ...] = (StepTimeout,)

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    async def run(self, logger: TargetLogger) -> None:
        for attempt in range(1, self.max_attempts + 1):
            try:
                await self.check()
                return
            except self.retry_on as e:
                if attempt == self.max_attempts:
                    logger.error("%s failed after %d attempts: %s", self.name, attempt, e)
                    raise
                logger.warning(
                    "%s attempt %d/%d failed: %s. Recovering...",
                    self.name, attempt, self.max_attempts, e,
                )
                await self.recover()
