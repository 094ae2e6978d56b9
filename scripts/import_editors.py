"""Import editors, credits and awards from a JSON file into the directory.

File layout::

    {"editors": [{"name": ..., "location": {...}, "experience": {...},
                  "professional": {...}, "metadata": {"dataSource": [...]},
                  "shows": [{"title": ..., "type": ..., "network": ...}],
                  "awards": [{"name": ..., "category": ..., "year": ...,
                              "status": ..., "show": ...}]}]}

Editors already present under the same name are skipped, so re-running an
import does not duplicate them.

Usage:
    python -m scripts.import_editors                       # default data file
    python -m scripts.import_editors path/to/editors.json
"""

import argparse
import asyncio
import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from editorfinder.config.settings import get_settings
from editorfinder.errors import StoreIOError, ValidationError
from editorfinder.models.editor import (
    Award,
    AwardDetail,
    AwardShow,
    Credit,
    Editor,
    RecordMetadata,
    Show,
    Timeline,
)
from editorfinder.repositories.editors import EditorRepository
from editorfinder.store.base import DocumentStore
from editorfinder.store.firestore import FirestoreDocumentStore

DEFAULT_DATA_PATH = Path(__file__).parent / "data" / "prominent_editors.json"
DATA_SOURCE = "industry-research"


@dataclass
class ImportSummary:
    editors_added: int = 0
    editors_skipped: int = 0
    credits_added: int = 0
    awards_added: int = 0
    added_names: list[str] = field(default_factory=list)


def load_records(path: Path) -> list[dict[str, Any]]:
    """Read the ``editors`` list from ``path``."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ValidationError(f"Data file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Invalid JSON in {path}: {exc}") from exc

    records = payload.get("editors") if isinstance(payload, dict) else None
    if not isinstance(records, list):
        raise ValidationError(f"{path} has no 'editors' list")
    return records


def _build(record: dict[str, Any]) -> tuple[Editor, list[Credit], list[Award]]:
    editor = Editor.model_validate({
        k: v for k, v in record.items() if k not in ("shows", "awards")
    })
    credits = [
        Credit(
            show=Show.model_validate(
                {k: v for k, v in s.items() if k in ("title", "type", "network", "genre", "imdbId")},
            ),
            timeline=Timeline(
                start_year=s.get("startYear"),
                end_year=s.get("endYear"),
                current=bool(s.get("current", False)),
            ),
            metadata=RecordMetadata(data_source=DATA_SOURCE, verified=True),
        )
        for s in record.get("shows", [])
    ]
    awards = [
        Award(
            award=AwardDetail.model_validate(
                {k: v for k, v in a.items() if k in ("name", "category", "year", "status")},
            ),
            show=AwardShow(title=a["show"]) if a.get("show") else None,
            metadata=RecordMetadata(data_source=DATA_SOURCE, verified=True),
        )
        for a in record.get("awards", [])
    ]
    return editor, credits, awards


async def import_editors(
    store: DocumentStore, records: list[dict[str, Any]],
) -> ImportSummary:
    """Validate every record first, then write editors with their credits and awards."""
    try:
        built = [_build(r) for r in records]
    except (PydanticValidationError, KeyError, TypeError, AttributeError) as exc:
        raise ValidationError(f"Invalid editor record: {exc}") from exc

    repo = EditorRepository(store)
    summary = ImportSummary()
    for editor, credits, awards in built:
        if await repo.find_by_name(editor.name):
            print(f"  Skipping {editor.name} (already present)")
            summary.editors_skipped += 1
            continue

        editor_id = await repo.add(editor)
        summary.editors_added += 1
        summary.added_names.append(editor.name)
        print(f"  Added {editor.name} ({editor_id[:8]}...)")

        for credit in credits:
            await repo.add_credit(editor_id, credit)
            summary.credits_added += 1
        for award in awards:
            await repo.add_award(editor_id, award)
            summary.awards_added += 1

    return summary


async def _run_import(path: Path) -> ImportSummary:
    settings = get_settings()
    settings.require_store_config()
    records = load_records(path)
    print(f"Loaded {len(records)} editors from {path}")
    store = FirestoreDocumentStore.from_settings(settings)
    try:
        return await import_editors(store, records)
    finally:
        await store.close()


def main(argv: list[str] | None = None) -> None:
    """Run the import and print a summary."""
    parser = argparse.ArgumentParser(description="Import editors from a JSON file")
    parser.add_argument(
        "path", type=Path, nargs="?", default=DEFAULT_DATA_PATH,
        help="Path to editors JSON (default: scripts/data/prominent_editors.json)",
    )
    args = parser.parse_args(argv)

    try:
        summary = asyncio.run(_run_import(args.path))
    except (ValidationError, StoreIOError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    print()
    print("Import complete.")
    print(f"  Editors added:   {summary.editors_added}")
    print(f"  Editors skipped: {summary.editors_skipped}")
    print(f"  Credits added:   {summary.credits_added}")
    print(f"  Awards added:    {summary.awards_added}")


if __name__ == "__main__":
    main()
