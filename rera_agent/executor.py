"""Cached action executor: replay a cached action, or resolve, cache and run a new one."""

from .cache import InstructionCache
from .errors import ResolutionError
from .logging_utils import TargetLogger


class CachedActionExecutor:
    """Runs instructions against a session, resolving each distinct one only once.

    The first call for an instruction pays for element resolution; its first
    candidate is cached under the exact instruction text and replayed on
    every later call.
    """

    def __init__(self, cache: InstructionCache, draw_overlays: bool = True, overlay_pause_ms: int = 1000):
        self.cache = cache
        self.draw_overlays = draw_overlays
        self.overlay_pause_ms = overlay_pause_ms

    async def act(self, session, instruction: str, logger: TargetLogger) -> None:
        cached_action = await self.cache.read(instruction)
        if cached_action is not None:
            logger.info("Using cached action for: %s", instruction)
            await session.execute_action(cached_action)
            return

        results = await session.resolve_instruction(instruction)
        logger.debug("Got results for %r: %s", instruction, results)
        if not results:
            raise ResolutionError(instruction)

        action_to_cache = results[0]
        logger.info("Taking cacheable action for %r: %s", instruction, action_to_cache)
        await self.cache.write(instruction, action_to_cache)

        if self.draw_overlays:
            try:
                await session.draw_overlay(results)
                await session.wait(self.overlay_pause_ms)
                await session.clear_overlay()
            except Exception as e:
                logger.warning("Overlay failed for %r: %s", instruction, e)

        await session.execute_action(action_to_cache)

    def bind(self, session, logger: TargetLogger):
        """Return ``act(instruction)`` bound to one session and logger."""

        async def act(instruction: str) -> None:
            await self.act(session, instruction, logger)

        return act
