"""Research entries and the activity log kept alongside them."""

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import Field

from editorfinder.models.common import EditorFinderBase, utc_now


class ResearchType(StrEnum):
    BIOGRAPHY = "biography"
    TECHNICAL_SKILLS = "technical-skills"
    WORK_STYLE = "work-style"
    AVAILABILITY = "availability"
    RATES = "rates"
    NETWORKING = "networking"
    PROJECTS = "projects"
    AWARDS = "awards"
    CLIENT_FEEDBACK = "client-feedback"
    CAREER_TRAJECTORY = "career-trajectory"
    SPECIALIZATION = "specialization"
    EQUIPMENT = "equipment"
    LOCATION = "location"
    COMMUNICATION = "communication"
    NEGOTIATION = "negotiation"
    PERFORMANCE = "performance"
    INDUSTRY_INTEL = "industry-intel"
    COMPETITIVE_ANALYSIS = "competitive-analysis"
    OPPORTUNITY = "opportunity"
    RISK_ASSESSMENT = "risk-assessment"
    RECOMMENDATION = "recommendation"


class Confidence(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERIFIED = "verified"


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ResearchStatus(StrEnum):
    DRAFT = "draft"
    ACTIVE = "active"
    ARCHIVED = "archived"
    DISPUTED = "disputed"


class ActivityAction(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    ARCHIVED = "archived"


class ResearchMetadata(EditorFinderBase):
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    created_by: str = "system"
    updated_by: str = "system"
    version: int = 1
    source: str | None = None


class ResearchEntry(EditorFinderBase):
    id: str | None = Field(default=None, exclude=True)
    editor_id: str
    type: ResearchType
    title: str
    content: str
    tags: list[str] = Field(default_factory=list)
    sources: list[dict[str, Any]] = Field(default_factory=list)
    confidence: Confidence = Confidence.MEDIUM
    priority: Priority = Priority.MEDIUM
    status: ResearchStatus = ResearchStatus.ACTIVE
    metadata: ResearchMetadata = Field(default_factory=ResearchMetadata)


class ResearchActivity(EditorFinderBase):
    editor_id: str
    action: ActivityAction
    resource_type: str = "research-entry"
    resource_id: str
    description: str
    user_id: str = "system"
    timestamp: datetime = Field(default_factory=utc_now)
    metadata: dict[str, Any] | None = None
