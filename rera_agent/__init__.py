"""RERA portal scraper package.

Modules:
- models: data models
- schemas: extraction schemas
- cache: instruction cache
- perception / planner / controller / overlay: element resolution and execution
- extractor: structured extraction
- session: one browser session
- executor: cached action executor
- retry: bounded retry for page steps
- extraction: page extraction routines
- reconcile: document/link reconciliation
- persistence: JSON/CSV output
- orchestrator: multi-target runs
- runs: end-to-end entry points
"""

from .cache import InstructionCache
from .config import Settings
from .executor import CachedActionExecutor
from .models import CachedAction, SessionOutcome
from .orchestrator import RunOrchestrator
from .reconcile import reconcile
from .runs import scrape_land_and_documents, scrape_project_details
from .session import BrowserSession

__all__ = [
    "InstructionCache",
    "Settings",
    "CachedActionExecutor",
    "CachedAction",
    "SessionOutcome",
    "RunOrchestrator",
    "reconcile",
    "scrape_land_and_documents",
    "scrape_project_details",
    "BrowserSession",
]
