"""Exception types raised by the assessment engine.

Validation problems are not exceptions: they are returned as lists of
`ValidationIssue` so callers decide whether to block a submission.
"""

from __future__ import annotations


class AssessmentError(Exception):
    """Base class for engine errors."""

    code = "ASSESSMENT_ERROR"


class GenerationError(AssessmentError):
    """The generator received input it cannot build an assessment from."""

    code = "GENERATION_FAILED"


class LifecycleViolation(AssessmentError):
    """A response operation would break the draft/submit state machine."""

    code = "LIFECYCLE_VIOLATION"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        if code:
            self.code = code


class AssessmentNotFound(AssessmentError):
    """No assessment exists for the requested id or job and stage."""

    code = "ASSESSMENT_NOT_FOUND"


class DataIntegrityGap(AssessmentError):
    """A stored row references a candidate or assessment that no longer resolves."""

    code = "DATA_INTEGRITY_GAP"


__all__ = [
    "AssessmentError",
    "AssessmentNotFound",
    "DataIntegrityGap",
    "GenerationError",
    "LifecycleViolation",
]
