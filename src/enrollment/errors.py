"""
Enrollment errors.

Remote failures are raised as exceptions by the client and converted into a
displayed SessionError by the controller. Nothing here is process-fatal.
"""

from dataclasses import dataclass
from enum import Enum


class EnrollmentError(Exception):
    """Base class for questionnaire errors."""


class BackendError(EnrollmentError):
    """A collaborator endpoint failed (transport error, non-2xx, bad body)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class DuplicateQuestionError(EnrollmentError, ValueError):
    """A question identifier is already present in the question list."""


class TransitionInProgressError(EnrollmentError):
    """advance_phase was called while another transition is in flight."""


class SessionClosedError(EnrollmentError):
    """The session reached recommendations; no further transitions."""


class ErrorKind(Enum):
    LOAD = "load"
    SUBMISSION = "submission"


@dataclass(frozen=True)
class SessionError:
    """The single user-facing error state of a session."""
    kind: ErrorKind
    message: str
    detail: str = ""  # underlying cause, for logs / verbose output
