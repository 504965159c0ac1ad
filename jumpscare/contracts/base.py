"""
Base Contracts and Shared Types

How a jump scare import, lookup or save reports failure.

Row-level problems travel as Error values inside a Result or a
ParseReport. Exceptions are raised only when a whole operation cannot
go on: an unusable payload, or a catalog or configuration store that
cannot be reached.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple
from enum import Enum, auto


# =============================================================================
# ERROR STATES (Explicit, never silent)
# =============================================================================

class ErrorCode(Enum):
    """Why an import, a row, or a collaborator call failed."""
    # Parser errors (fatal to the whole import)
    EMPTY_PAYLOAD = auto()
    MALFORMED_PAYLOAD = auto()

    # Row-level errors (row skipped, batch continues)
    MALFORMED_ROW = auto()
    INVALID_TIMESTAMP = auto()
    ITEM_NOT_MATCHED = auto()
    ROW_PARSE_FAILED = auto()

    # Collaborator errors
    CATALOG_UNAVAILABLE = auto()
    CONFIGURATION_UNAVAILABLE = auto()
    STORAGE_WRITE_FAILED = auto()


@dataclass(frozen=True)
class Error:
    """A failure reason; `context` holds (name, value) pairs such as the offending timestamp."""
    code: ErrorCode
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    context: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Result:
    """Value of a parse step, or the Error explaining why there is none."""
    value: Optional[object] = None
    error: Optional[Error] = None

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    @staticmethod
    def success(value: object) -> Result:
        return Result(value=value, error=None)

    @staticmethod
    def failure(error: Error) -> Result:
        return Result(value=None, error=error)


# =============================================================================
# FATAL BOUNDARY EXCEPTIONS
# =============================================================================

class JumpScareError(Exception):
    """Base exception carrying an explicit Error value."""

    def __init__(self, error: Error):
        super().__init__(error.message)
        self.error = error

    @property
    def code(self) -> ErrorCode:
        return self.error.code


class InvalidInputError(JumpScareError):
    """Import payload is unusable as a whole (empty or too short)."""


class CollaboratorUnavailableError(JumpScareError):
    """A host collaborator (catalog, configuration) could not be reached."""


class StorageUnavailableError(CollaboratorUnavailableError):
    """The configuration store failed to persist a mutation."""
