"""Scrape land details and uploaded documents for a list of project names.

Usage:
    pip install -e .
    playwright install chromium
    python scrape_land_documents.py

Results go to scraped_data/json and scraped_data/csv; resolved UI actions
are cached in cache.json (delete it after a portal layout change).
"""

import asyncio

from rera_agent import scrape_land_and_documents

PROJECT_NAMES = ["birla evara"]


if __name__ == "__main__":
    asyncio.run(scrape_land_and_documents(PROJECT_NAMES))
