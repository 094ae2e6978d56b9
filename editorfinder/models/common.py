"""Shared types, enums, and base models used across Editor Finder domain models."""

from datetime import datetime, timezone
from enum import StrEnum
from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from uuid_extensions import uuid7


def utc_now() -> datetime:
    """Return the current UTC timestamp (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def new_uuid7() -> UUID:
    """Generate a new time-sortable UUID v7."""
    return uuid7()


def new_document_id() -> str:
    """Generate a document ID for records the store does not key itself."""
    return new_uuid7().hex


# --- Reusable annotated types ---

UTCTimestamp = Annotated[
    datetime, Field(description="UTC timezone-aware timestamp.")
]
Score = Annotated[float, Field(ge=0.0, description="Non-negative score.")]


# --- Shared enums ---


class UnionStatus(StrEnum):
    GUILD = "guild"
    NON_UNION = "non-union"
    UNKNOWN = "unknown"


class Availability(StrEnum):
    AVAILABLE = "available"
    BUSY = "busy"
    UNKNOWN = "unknown"


class ShowType(StrEnum):
    SERIES = "series"
    MINISERIES = "miniseries"
    SPECIAL = "special"
    DOCUMENTARY = "documentary"


class CreditPosition(StrEnum):
    SUPERVISING_EDITOR = "supervising-editor"
    EDITOR = "editor"
    ASSISTANT_EDITOR = "assistant-editor"
    ASSOCIATE_EDITOR = "associate-editor"


class AwardStatus(StrEnum):
    WON = "won"
    NOMINATED = "nominated"


class CareerStage(StrEnum):
    """Career-stage bucket on a knowledge summary."""

    EMERGING = "emerging"
    ESTABLISHED = "established"
    VETERAN = "veteran"


# --- Collection names ---


class Collections(StrEnum):
    """Top-level and sub-collection names in the document store."""

    EDITORS = "editors"
    CREDITS = "credits"
    AWARDS = "awards"
    EDITOR_KNOWLEDGE = "editorKnowledge"
    RESEARCH = "research"
    RESEARCH_ACTIVITIES = "researchActivities"
    SYNC_LOGS = "syncLogs"
    EMMY_CATEGORIES = "emmyCategories"
    EMMY_AWARDS = "emmyAwards"


# --- Base model ---


class EditorFinderBase(BaseModel):
    """Base model for all stored documents.

    Python attributes are snake_case; documents are stored and served with
    camelCase keys.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
    )

    def to_document(self) -> dict[str, Any]:
        """Serialize to the camelCase dict written to the store."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_response(self) -> dict[str, Any]:
        """Document shape served by the API, with the document ID when known."""
        doc = self.to_document()
        doc_id = getattr(self, "id", None)
        return {"id": doc_id, **doc} if doc_id is not None else doc

    @classmethod
    def from_document(cls, data: dict[str, Any], doc_id: str | None = None):  # noqa: ANN206
        if doc_id is not None and "id" in cls.model_fields:
            return cls.model_validate({**data, "id": doc_id})
        return cls.model_validate(data)


class ApiEnvelope(BaseModel):
    """Response envelope shared by every API route."""

    data: Any = None
    success: bool
    error: str | None = None
    timestamp: datetime = Field(default_factory=utc_now)
