"""Remove mock editors (and their credits and awards) from the directory.

Usage:
    python -m scripts.cleanup_mock_editors            # delete
    python -m scripts.cleanup_mock_editors --dry-run  # report only
"""

import argparse
import asyncio
import sys

from editorfinder.cleanup.engine import CleanupEngine, CleanupReport
from editorfinder.config.settings import get_settings
from editorfinder.errors import StoreIOError, ValidationError
from editorfinder.store.firestore import FirestoreDocumentStore


def print_report(report: CleanupReport) -> None:
    verb = "Would delete" if report.dry_run else "Deleted"
    for match in report.matches:
        print(f"  {verb}: {match.name} ({match.editor_id}) - {match.reason}")
    for error in report.errors:
        print(f"  WARNING: {error}")

    print()
    print("Cleanup summary")
    print(f"  Scanned:   {report.scanned}")
    print(f"  Matched:   {len(report.matches)}")
    print(f"  Deleted:   {report.deleted}")
    print(f"  Remaining: {report.remaining}")
    if not report.dry_run:
        print(f"  Batches:   {report.batches_committed}")


async def _run_cleanup(dry_run: bool) -> CleanupReport:
    settings = get_settings()
    settings.require_store_config()
    store = FirestoreDocumentStore.from_settings(settings)
    try:
        return await CleanupEngine(store).run(dry_run=dry_run)
    finally:
        await store.close()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Remove mock editors from Firestore")
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Classify and report without deleting anything",
    )
    args = parser.parse_args(argv)

    try:
        report = asyncio.run(_run_cleanup(args.dry_run))
    except (ValidationError, StoreIOError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    print_report(report)


if __name__ == "__main__":
    main()
