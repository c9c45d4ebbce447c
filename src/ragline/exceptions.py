# src/ragline/exceptions.py
"""Error taxonomy for the ragline pipeline.

Every error raised by the pipeline carries an ErrorKind and a structured
context dict. Callers classify failures by ``error.kind``; the message text is
for humans only.
"""

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Category of a pipeline failure."""

    INVALID = "invalid"
    DUPLICATE = "duplicate"
    NOT_FOUND = "not_found"
    SERVICE_FAILURE = "service_failure"
    PERSISTENCE_FAILURE = "persistence_failure"
    EXTRACTION_FAILURE = "extraction_failure"


class RaglineError(Exception):
    """Base class for all ragline errors.

    Attributes:
        kind: The error category.
        context: Structured details about the failure (ids, counts, names).
    """

    kind: ErrorKind = ErrorKind.INVALID

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context


class ValidationError(RaglineError):
    """Rejected input or configuration, detected before any I/O."""

    kind = ErrorKind.INVALID


class DuplicateError(RaglineError):
    """Content with the same checksum was already ingested."""

    kind = ErrorKind.DUPLICATE


class NotFoundError(RaglineError):
    """Unknown document or chunk id."""

    kind = ErrorKind.NOT_FOUND


class ExternalServiceError(RaglineError):
    """Embedding or language-model call failed or returned a malformed response."""

    kind = ErrorKind.SERVICE_FAILURE


class PersistenceError(RaglineError):
    """A store read or write failed."""

    kind = ErrorKind.PERSISTENCE_FAILURE


class ExtractionError(RaglineError):
    """Text could not be extracted from an uploaded file."""

    kind = ErrorKind.EXTRACTION_FAILURE
