"""Runtime settings, read from the environment (and a local .env file)."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


DEFAULT_PORTAL_URL = "https://rera.karnataka.gov.in/viewAllProjects"
DOWNLOAD_URL_PREFIX = "https://rera.karnataka.gov.in/download_jc?DOC_ID="


def _env_int(name: str, default: int) -> int:
    """Positive integer from the environment, falling back to ``default``."""
    try:
        value = int(os.getenv(name, str(default)))
    except ValueError:
        return default
    return value if value > 0 else default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Settings for one scraping run."""
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    model: str = "gpt-4o"
    portal_url: str = DEFAULT_PORTAL_URL
    headless: bool = False
    cache_path: Path = Path("cache.json")
    output_dir: Path = Path("scraped_data")
    project_details_path: Path = Path("project_details.json")
    navigation_timeout_ms: int = 600_000  # the portal is slow
    tab_ready_timeout_ms: int = 5_000
    detail_settle_ms: int = 2_000
    overlay_pause_ms: int = 1_000
    draw_overlays: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            openai_base_url=os.getenv("OPENAI_BASE_URL") or None,
            model=os.getenv("OPENAI_MODEL", "gpt-4o"),
            portal_url=os.getenv("RERA_PORTAL_URL", DEFAULT_PORTAL_URL),
            headless=_env_bool("RERA_HEADLESS", False),
            cache_path=Path(os.getenv("RERA_CACHE_PATH", "cache.json")),
            output_dir=Path(os.getenv("RERA_OUTPUT_DIR", "scraped_data")),
            project_details_path=Path(os.getenv("RERA_PROJECT_DETAILS_PATH", "project_details.json")),
            navigation_timeout_ms=_env_int("RERA_NAVIGATION_TIMEOUT_MS", 600_000),
            tab_ready_timeout_ms=_env_int("RERA_TAB_READY_TIMEOUT_MS", 5_000),
            detail_settle_ms=_env_int("RERA_DETAIL_SETTLE_MS", 2_000),
            overlay_pause_ms=_env_int("RERA_OVERLAY_PAUSE_MS", 1_000),
            draw_overlays=_env_bool("RERA_DRAW_OVERLAYS", True),
            log_level=os.getenv("RERA_LOG_LEVEL", "INFO").upper(),
        )
