"""Editor, Credit and Award documents.

Editors live in the ``editors`` collection; credits and awards live in the
``credits`` / ``awards`` subcollections of their editor.
"""

from datetime import datetime

from pydantic import Field

from editorfinder.models.common import (
    Availability,
    AwardStatus,
    CreditPosition,
    EditorFinderBase,
    ShowType,
    UnionStatus,
    utc_now,
)

# ---------------------------------------------------------------------------
# Editor
# ---------------------------------------------------------------------------


class Location(EditorFinderBase):
    city: str = "Unknown"
    state: str = "Unknown"
    country: str = "Unknown"
    remote: bool = False


class Experience(EditorFinderBase):
    years_active: int = Field(default=0, ge=0)
    start_year: int | None = None
    specialties: list[str] = Field(default_factory=list)


class Representation(EditorFinderBase):
    agent: str | None = None
    agent_contact: str | None = None
    manager: str | None = None
    manager_contact: str | None = None


class Professional(EditorFinderBase):
    union_status: UnionStatus = UnionStatus.UNKNOWN
    imdb_id: str | None = None
    availability: Availability = Availability.UNKNOWN
    representation: Representation | None = None


class EditorMetadata(EditorFinderBase):
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    data_source: list[str] = Field(default_factory=list)
    verified: bool = False


class Editor(EditorFinderBase):
    """Editor profile. ``id`` is the document ID and is not stored in the body."""

    id: str | None = Field(default=None, exclude=True)
    name: str
    email: str | None = None
    phone: str | None = None
    location: Location = Field(default_factory=Location)
    experience: Experience = Field(default_factory=Experience)
    professional: Professional = Field(default_factory=Professional)
    metadata: EditorMetadata = Field(default_factory=EditorMetadata)


# ---------------------------------------------------------------------------
# Credit
# ---------------------------------------------------------------------------


class Show(EditorFinderBase):
    title: str
    type: ShowType = ShowType.SERIES
    network: str = "Unknown"
    genre: list[str] = Field(default_factory=list)
    imdb_id: str | None = None


class Role(EditorFinderBase):
    position: CreditPosition = CreditPosition.EDITOR
    episode_count: int | None = None
    season_count: int | None = None


class Timeline(EditorFinderBase):
    start_year: int | None = None
    end_year: int | None = None
    current: bool = False


class RecordMetadata(EditorFinderBase):
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    data_source: str = "manual"
    verified: bool = False


class Credit(EditorFinderBase):
    id: str | None = Field(default=None, exclude=True)
    editor_id: str | None = None
    show: Show
    role: Role = Field(default_factory=Role)
    timeline: Timeline = Field(default_factory=Timeline)
    metadata: RecordMetadata = Field(default_factory=RecordMetadata)


# ---------------------------------------------------------------------------
# Award
# ---------------------------------------------------------------------------


class AwardDetail(EditorFinderBase):
    name: str
    category: str
    year: int
    status: AwardStatus


class AwardShow(EditorFinderBase):
    title: str
    network: str = "Unknown"


class Award(EditorFinderBase):
    id: str | None = Field(default=None, exclude=True)
    editor_id: str | None = None
    award: AwardDetail
    show: AwardShow | None = None
    metadata: RecordMetadata = Field(default_factory=RecordMetadata)
