"""Auto-research: enrich editor knowledge records from web search.

For every editor, in batches, runs a fixed set of search queries through the
web-search provider, extracts biography sentences, projects, awards, skills
and work-style keywords, writes three research entries
(``{editorId}-biography``, ``-projects``, ``-awards``) and merges the findings
into the editor's knowledge record.

Editors researched within the freshness window are skipped. Without a
provider token nothing is written: every editor is skipped.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from editorfinder.errors import EditorFinderError
from editorfinder.models.common import CareerStage, Collections, utc_now
from editorfinder.models.editor import Editor
from editorfinder.models.knowledge import default_knowledge
from editorfinder.models.research import (
    Confidence,
    Priority,
    ResearchEntry,
    ResearchMetadata,
    ResearchType,
)
from editorfinder.repositories.editors import EditorRepository
from editorfinder.repositories.knowledge import KnowledgeRepository
from editorfinder.research import extract
from editorfinder.research.apify import ApifyClient
from editorfinder.store.base import SERVER_TIMESTAMP, DocumentStore

logger = logging.getLogger(__name__)

FRESHNESS_WINDOW = timedelta(days=7)
EDITOR_BATCH_SIZE = 5
RESEARCH_AUTHOR = "auto-research-service"
RESEARCH_SOURCE = "automated-apify-research"

QUERY_TEMPLATES: tuple[str, ...] = (
    '"{name}" TV editor biography Emmy',
    '"{name}" television editing credits IMDB',
    '"{name}" film editor awards ACE Eddie',
    '"{name}" editor interview work style',
    '"{name}" post-production editor rates',
)


def career_stage(years_active: int) -> CareerStage:
    if years_active > 15:
        return CareerStage.VETERAN
    if years_active > 8:
        return CareerStage.ESTABLISHED
    return CareerStage.EMERGING


@dataclass
class EditorFindings:
    biography: str = ""
    projects: list[str] = field(default_factory=list)
    awards: list[str] = field(default_factory=list)
    skills: list[str] = field(default_factory=list)
    work_style: list[str] = field(default_factory=list)


@dataclass
class ResearchReport:
    editors_processed: int = 0
    editors_researched: int = 0
    editors_skipped: int = 0
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "editorsProcessed": self.editors_processed,
            "editorsResearched": self.editors_researched,
            "editorsSkipped": self.editors_skipped,
            "errors": list(self.errors),
        }


class AutoResearchService:
    """Batch research over every editor in the directory."""

    def __init__(
        self,
        store: DocumentStore,
        provider: ApifyClient,
        *,
        delay_ms: int = 2000,
        batch_size: int = EDITOR_BATCH_SIZE,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._editors = EditorRepository(store)
        self._knowledge = KnowledgeRepository(store)
        self._provider = provider
        self._delay_s = delay_ms / 1000
        self._batch_size = batch_size
        self._clock = clock

    async def gather_all(self) -> ResearchReport:
        report = ResearchReport()
        editors = await self._editors.list_all()
        logger.info("Found %d editors to research", len(editors))
        if not self._provider.configured:
            logger.warning("Apify token not configured; skipping web research")

        for start in range(0, len(editors), self._batch_size):
            batch = editors[start:start + self._batch_size]
            outcomes = await asyncio.gather(
                *(self.research_editor(e) for e in batch), return_exceptions=True,
            )
            for editor, outcome in zip(batch, outcomes):
                report.editors_processed += 1
                if isinstance(outcome, EditorFinderError):
                    msg = f"Failed to research {editor.name}: {outcome}"
                    logger.error(msg)
                    report.errors.append(msg)
                elif isinstance(outcome, BaseException):
                    raise outcome
                elif outcome:
                    report.editors_researched += 1
                else:
                    report.editors_skipped += 1
            if start + self._batch_size < len(editors):
                await asyncio.sleep(self._delay_s)

        logger.info(
            "Research finished: %d researched, %d skipped, %d errors",
            report.editors_researched, report.editors_skipped, len(report.errors),
        )
        return report

    async def research_editor(self, editor: Editor) -> bool:
        """Research one editor. Returns False when the editor was skipped."""
        editor_id = editor.id or ""
        if not self._provider.configured:
            return False
        if await self._is_fresh(editor_id):
            logger.info("Skipping %s: researched within %s", editor.name, FRESHNESS_WINDOW)
            return False

        findings = await self.find(editor)
        await self._save_entries(editor_id, findings)
        await self._merge_knowledge(editor, findings)
        logger.info("Research completed for %s", editor.name)
        return True

    async def find(self, editor: Editor) -> EditorFindings:
        items: list[dict[str, Any]] = []
        for template in QUERY_TEMPLATES:
            items.extend(await self._provider.search(template.format(name=editor.name)))
        text = extract.combined_text(items)

        specialties = ", ".join(editor.experience.specialties) or "various genres"
        return EditorFindings(
            biography=extract.extract_biography(text, editor.name)
            or f"Professional television editor with expertise in {specialties}.",
            projects=extract.extract_projects(text),
            awards=extract.extract_awards(text),
            skills=extract.extract_skills(text),
            work_style=extract.extract_work_style(text),
        )

    async def _is_fresh(self, editor_id: str) -> bool:
        data = await self._knowledge.get(editor_id)
        researched_at = (data or {}).get("researchedAt")
        if not isinstance(researched_at, datetime):
            return False
        return self._clock() - researched_at < FRESHNESS_WINDOW

    async def _save_entries(self, editor_id: str, findings: EditorFindings) -> None:
        entries = (
            (ResearchType.BIOGRAPHY, "Professional Biography", findings.biography,
             Priority.MEDIUM),
            (ResearchType.PROJECTS, "Recent Projects", ", ".join(findings.projects),
             Priority.HIGH),
            (ResearchType.AWARDS, "Awards & Recognition", ", ".join(findings.awards),
             Priority.HIGH),
        )
        batch = self._store.batch()
        for research_type, title, content, priority in entries:
            entry = ResearchEntry(
                editor_id=editor_id,
                type=research_type,
                title=title,
                content=content,
                confidence=Confidence.MEDIUM,
                priority=priority,
                metadata=ResearchMetadata(
                    created_by=RESEARCH_AUTHOR,
                    updated_by=RESEARCH_AUTHOR,
                    source=RESEARCH_SOURCE,
                ),
            )
            batch.set(Collections.RESEARCH, f"{editor_id}-{research_type}", entry.to_document())
        await batch.commit()

    async def _merge_knowledge(self, editor: Editor, findings: EditorFindings) -> None:
        editor_id = editor.id or ""
        if await self._knowledge.get(editor_id) is None:
            await self._knowledge.create(editor_id, default_knowledge())

        await self._knowledge.merge(editor_id, {
            "summary.keyStrengths": findings.skills,
            "summary.primarySpecialties": list(editor.experience.specialties),
            "summary.careerStage": career_stage(editor.experience.years_active).value,
            "summary.workingStyle": findings.work_style,
            "researchedAt": SERVER_TIMESTAMP,
        })
