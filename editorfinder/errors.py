"""Shared exception taxonomy for Editor Finder.

Every error carries the HTTP status and short ``error`` label the API
boundary uses when it turns the exception into a JSON envelope. Scripts catch
the same classes and exit non-zero.
"""

from __future__ import annotations


class EditorFinderError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500
    error: str = "Internal error"

    def __init__(self, message: str = "", *, data_message: str | None = None) -> None:
        super().__init__(message or self.error)
        self.message = message or self.error
        # Human-readable text placed in the envelope's data.message.
        self.data_message = data_message or self.message


# ---------------------------------------------------------------------------
# 404
# ---------------------------------------------------------------------------


class NotFoundError(EditorFinderError):
    """A document that had to exist is absent."""

    status_code = 404
    error = "Not found"


class DocumentNotFoundError(NotFoundError):
    """Raised by a document store when ``update`` targets a missing document."""

    def __init__(self, path: str) -> None:
        super().__init__(f"No document to update: {path}")
        self.path = path


class KnowledgeNotFoundError(NotFoundError):
    """Knowledge document absent where update-only semantics apply."""

    def __init__(self, editor_id: str) -> None:
        super().__init__(
            f"No knowledge document for editor {editor_id}",
            data_message="Failed to update editor knowledge",
        )
        # The envelope reports the underlying failure, not the generic label.
        self.error = self.message
        self.editor_id = editor_id


class EditorNotFoundError(NotFoundError):
    def __init__(self, editor_id: str) -> None:
        super().__init__(f"Editor {editor_id} not found")
        self.editor_id = editor_id


class ResearchEntryNotFoundError(NotFoundError):
    def __init__(self, research_id: str) -> None:
        super().__init__(f"Research entry {research_id} not found")
        self.research_id = research_id


# ---------------------------------------------------------------------------
# 400 / 401
# ---------------------------------------------------------------------------


class InvalidActionError(EditorFinderError):
    """Unrecognized knowledge POST action."""

    status_code = 400
    error = "Invalid action"

    VALID_ACTIONS = ("update", "regenerate")

    def __init__(self, action: object) -> None:
        super().__init__(
            f"Invalid action {action!r}",
            data_message='Invalid action. Use "update" or "regenerate"',
        )
        self.action = action


class InvalidSourceError(EditorFinderError):
    """Unknown sync source."""

    status_code = 400

    def __init__(self, source: object, valid: tuple[str, ...]) -> None:
        self.error = f"Invalid source. Must be one of: {', '.join(valid)}"
        super().__init__(self.error)
        self.source = source


class ValidationError(EditorFinderError):
    """Missing or malformed caller input or configuration."""

    status_code = 400
    error = "Validation failed"


class UnauthorizedError(EditorFinderError):
    status_code = 401
    error = "Unauthorized"


# ---------------------------------------------------------------------------
# 500
# ---------------------------------------------------------------------------


class StoreIOError(EditorFinderError):
    """Read, write or batch-commit failure against the document store."""

    error = "Document store failure"


class KnowledgeFetchError(StoreIOError):
    def __init__(self, editor_id: str, cause: BaseException) -> None:
        super().__init__(
            str(cause) or type(cause).__name__,
            data_message="Failed to fetch editor knowledge",
        )
        # The envelope reports the underlying failure, not the generic label.
        self.error = self.message
        self.editor_id = editor_id
        self.__cause__ = cause


class KnowledgeUpdateError(StoreIOError):
    def __init__(self, editor_id: str, cause: BaseException) -> None:
        super().__init__(
            str(cause) or type(cause).__name__,
            data_message="Failed to update editor knowledge",
        )
        # The envelope reports the underlying failure, not the generic label.
        self.error = self.message
        self.editor_id = editor_id
        self.__cause__ = cause


class UpstreamServiceError(EditorFinderError):
    """Third-party provider (TMDb, Apify) failure."""

    error = "Upstream service failure"


__all__ = [
    "DocumentNotFoundError",
    "EditorFinderError",
    "EditorNotFoundError",
    "InvalidActionError",
    "InvalidSourceError",
    "KnowledgeFetchError",
    "KnowledgeNotFoundError",
    "KnowledgeUpdateError",
    "NotFoundError",
    "ResearchEntryNotFoundError",
    "StoreIOError",
    "UnauthorizedError",
    "UpstreamServiceError",
    "ValidationError",
]
