"""Run orchestrator: one browser session per target, run concurrently, failures isolated."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Sequence

from .executor import CachedActionExecutor
from .logging_utils import TargetLogger
from .models import SessionOutcome

logger = logging.getLogger(__name__)

Pipeline = Callable[..., Awaitable[Dict[str, Any]]]
Persister = Callable[[SessionOutcome, TargetLogger], None]


def validate_targets(targets: Sequence[str]) -> List[str]:
    if not isinstance(targets, (list, tuple)):
        raise ValueError(f"targets must be a list of strings, got {type(targets).__name__}")
    for target in targets:
        if not isinstance(target, str) or not target.strip():
            raise ValueError(f"invalid target identifier: {target!r}")
    return list(targets)


class RunOrchestrator:
    """Fans targets out to isolated sessions and fans outcomes back in.

    The first target reuses ``first_session``, which the caller initialized
    and keeps ownership of. Every other target gets a fresh session from
    ``session_factory`` that is initialized here and disposed when its
    pipeline settles.
    """

    def __init__(self, first_session, session_factory: Callable[[], Any], executor: CachedActionExecutor):
        self.first_session = first_session
        self.session_factory = session_factory
        self.executor = executor

    async def _run_target(self, index: int, target: str, pipeline: Pipeline) -> SessionOutcome:
        target_logger = TargetLogger(logger, target)
        fresh = index > 0
        session = self.session_factory() if fresh else self.first_session
        try:
            if fresh:
                await session.initialize()
            act = self.executor.bind(session, target_logger.for_step("act"))
            result = await pipeline(session, act, target, logger=target_logger)
            return SessionOutcome(target=target, result=result)
        except Exception as e:
            target_logger.exception("Error processing %s: %s", target, e)
            return SessionOutcome(target=target, error=e)
        finally:
            if fresh:
                try:
                    await session.dispose()
                except Exception as e:
                    target_logger.warning("Failed to close session for %s: %s", target, e)

    async def run(self, targets: Sequence[str], pipeline: Pipeline, persist: Persister) -> List[SessionOutcome]:
        targets = validate_targets(targets)
        outcomes = await asyncio.gather(
            *(self._run_target(i, target, pipeline) for i, target in enumerate(targets))
        )
        self.persist_all(outcomes, persist)
        return list(outcomes)

    def persist_all(self, outcomes: Sequence[SessionOutcome], persist: Persister) -> None:
        for outcome in outcomes:
            if not outcome.ok:
                continue
            target_logger = TargetLogger(logger, outcome.target, "persist")
            try:
                persist(outcome, target_logger)
            except Exception as e:
                target_logger.exception("Error saving results for %s: %s", outcome.target, e)
