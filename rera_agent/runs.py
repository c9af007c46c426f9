"""End-to-end runs: land details + documents by project name, project details by registration number."""

import functools
from typing import List, Optional, Sequence

from .cache import InstructionCache
from .config import Settings
from .executor import CachedActionExecutor
from .extraction import extract_land_and_documents_for, extract_project_details_for
from .logging_utils import configure_logging
from .models import SessionOutcome
from .orchestrator import Pipeline, Persister, RunOrchestrator, validate_targets
from .persistence import persist_land_and_documents, persist_project_details
from .session import BrowserSession


async def _run(targets: Sequence[str], settings: Settings, pipeline: Pipeline,
               persist: Persister) -> List[SessionOutcome]:
    targets = validate_targets(targets)
    executor = CachedActionExecutor(
        InstructionCache(settings.cache_path),
        draw_overlays=settings.draw_overlays,
        overlay_pause_ms=settings.overlay_pause_ms,
    )
    first_session = BrowserSession(settings)
    try:
        await first_session.initialize()
        orchestrator = RunOrchestrator(first_session, lambda: BrowserSession(settings), executor)
        return await orchestrator.run(targets, pipeline, persist)
    finally:
        await first_session.dispose()


async def scrape_land_and_documents(project_names: Sequence[str],
                                    settings: Optional[Settings] = None) -> List[SessionOutcome]:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)
    return await _run(
        project_names,
        settings,
        functools.partial(extract_land_and_documents_for, settings=settings),
        lambda outcome, logger: persist_land_and_documents(outcome, settings.output_dir, logger),
    )


async def scrape_project_details(registration_numbers: Sequence[str],
                                 settings: Optional[Settings] = None) -> List[SessionOutcome]:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)
    return await _run(
        registration_numbers,
        settings,
        functools.partial(extract_project_details_for, settings=settings),
        lambda outcome, logger: persist_project_details(outcome, settings.project_details_path, logger),
    )
