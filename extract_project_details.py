"""Scrape project details and complaints for a list of registration numbers.

Usage:
    python extract_project_details.py

The result is written to project_details.json.
"""

import asyncio

from rera_agent import scrape_project_details

REGISTRATION_NUMBERS = ["PRM/KA/RERA/1251/446/PR/060225/007487"]


if __name__ == "__main__":
    asyncio.run(scrape_project_details(REGISTRATION_NUMBERS))
