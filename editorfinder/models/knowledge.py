"""Editor knowledge record: the aggregated intelligence profile for one editor.

One document per editor in the ``editorKnowledge`` collection, keyed by the
editor ID. The stored document never carries ``editorId``; API responses add
it. Every field has a default so ``default_knowledge()`` is simply an empty
constructor call, and a record written by an older client with missing keys
still deserializes.
"""

from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field

from editorfinder.models.common import (
    CareerStage,
    EditorFinderBase,
    Score,
    utc_now,
)

# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


class RateRange(EditorFinderBase):
    min: float | None = None
    max: float | None = None
    currency: str = "USD"
    unit: str = "project"
    last_updated: datetime = Field(default_factory=utc_now)


class KnowledgeSummary(EditorFinderBase):
    key_strengths: list[str] = Field(default_factory=list)
    primary_specialties: list[str] = Field(default_factory=list)
    career_stage: CareerStage = CareerStage.EMERGING
    availability_pattern: str = "unknown"
    rate_range: RateRange = Field(default_factory=RateRange)
    preferred_project_types: list[str] = Field(default_factory=list)
    working_style: list[str] = Field(default_factory=list)
    communication_style: str = "Unknown"
    last_known_status: str = "No recent information available"


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------


class ResponseTimeMetrics(EditorFinderBase):
    average: Score = 0
    reliability: Score = 0
    last_updated: datetime = Field(default_factory=utc_now)


class ProjectCompletionMetrics(EditorFinderBase):
    on_time_rate: Score = 0
    quality_score: Score = 0
    client_satisfaction: Score = 0
    last_updated: datetime = Field(default_factory=utc_now)


class CollaborationMetrics(EditorFinderBase):
    teamwork_score: Score = 0
    communication_score: Score = 0
    flexibility_score: Score = 0
    last_updated: datetime = Field(default_factory=utc_now)


class TechnicalSkillsMetrics(EditorFinderBase):
    # Keys are tool names as entered ("Avid Media Composer"), not camelCased.
    software_proficiency: dict[str, float] = Field(default_factory=dict)
    adaptability_score: Score = 0
    innovation_score: Score = 0
    last_updated: datetime = Field(default_factory=utc_now)


class PerformanceMetrics(EditorFinderBase):
    response_time: ResponseTimeMetrics = Field(default_factory=ResponseTimeMetrics)
    project_completion: ProjectCompletionMetrics = Field(
        default_factory=ProjectCompletionMetrics,
    )
    collaboration: CollaborationMetrics = Field(default_factory=CollaborationMetrics)
    technical_skills: TechnicalSkillsMetrics = Field(
        default_factory=TechnicalSkillsMetrics,
    )


# ---------------------------------------------------------------------------
# Record
# ---------------------------------------------------------------------------


class EditorKnowledge(EditorFinderBase):
    """Knowledge document as stored (no ``editorId``).

    Unknown top-level keys written through ``update`` patches are kept.
    """

    model_config = ConfigDict(extra="allow")

    summary: KnowledgeSummary = Field(default_factory=KnowledgeSummary)
    insights: list[dict[str, Any]] = Field(default_factory=list)
    connections: list[dict[str, Any]] = Field(default_factory=list)
    opportunities: list[dict[str, Any]] = Field(default_factory=list)
    risks: list[dict[str, Any]] = Field(default_factory=list)
    metrics: PerformanceMetrics = Field(default_factory=PerformanceMetrics)
    last_updated: datetime = Field(default_factory=utc_now)
    completeness: float = Field(default=0.0, ge=0.0, le=1.0)

    def with_editor_id(self, editor_id: str) -> dict[str, Any]:
        """Document shape served by the API: stored fields plus ``editorId``."""
        return {"editorId": editor_id, **self.to_document()}


def default_knowledge() -> EditorKnowledge:
    """Return a fully-defaulted, not-yet-enriched knowledge record."""
    return EditorKnowledge()
