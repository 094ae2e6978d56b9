"""Run automated web research for every editor in the directory.

Requires APIFY_TOKEN; without it every editor is skipped.

Usage:
    python -m scripts.gather_research
"""

import asyncio
import sys

from editorfinder.config.settings import get_settings
from editorfinder.errors import StoreIOError, ValidationError
from editorfinder.research.apify import ApifyClient
from editorfinder.research.auto_research import AutoResearchService, ResearchReport
from editorfinder.store.firestore import FirestoreDocumentStore


async def _run_research() -> ResearchReport:
    settings = get_settings()
    settings.require_store_config()
    store = FirestoreDocumentStore.from_settings(settings)
    service = AutoResearchService(
        store,
        ApifyClient(settings.APIFY_TOKEN),
        delay_ms=settings.SCRAPING_DELAY_MS,
    )
    try:
        return await service.gather_all()
    finally:
        await store.close()


def main() -> None:
    try:
        report = asyncio.run(_run_research())
    except (ValidationError, StoreIOError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    print("Research complete.")
    print(f"  Processed:  {report.editors_processed}")
    print(f"  Researched: {report.editors_researched}")
    print(f"  Skipped:    {report.editors_skipped}")
    if report.errors:
        print(f"  Errors ({len(report.errors)}):")
        for error in report.errors:
            print(f"    ! {error}")


if __name__ == "__main__":
    main()
