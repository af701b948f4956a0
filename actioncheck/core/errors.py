"""
ActionCheck Core: Error taxonomy.

Fatal conditions raised by the collaborators around the matching engine.
Filter-shape anomalies never surface here: the normalizer and the pattern
matcher absorb them into empty filters and non-matching patterns.
"""
from typing import Optional

from actioncheck.core.constants import ErrorCode


class DetectionError(Exception):
    """Base exception for errors that abort a detection run."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize DetectionError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class MissingEventContext(DetectionError):
    """The triggering event name could not be determined."""


class DefinitionReadError(DetectionError):
    """Workflow definitions exist but could not be read."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.PERMISSION_DENIED,
    ):
        super().__init__(message, error_code)
        self.path = path


class DefinitionParseError(DetectionError):
    """A workflow document could not be parsed into trigger declarations."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, ErrorCode.INVALID_INPUT)
        self.path = path


class ChangedFilesError(DetectionError):
    """The changed-file list could not be parsed."""


class OutputError(DetectionError):
    """Results could not be written to an output channel."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.INTERNAL_ERROR)
