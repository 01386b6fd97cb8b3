# File: mediajob/core/common/exceptions.py


class MediaJobError(Exception):
    """Base class for failures raised by pipeline collaborators."""


class ResolutionError(MediaJobError):
    """The source reference could not be materialized into a local path."""


class EngineError(MediaJobError):
    """The transcoding engine returned a non-zero or otherwise erroneous status."""

    def __init__(self, message: str, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class PersistError(MediaJobError):
    """
    Writing to the media library failed.
    A denied permission is NOT a PersistError; see PersistOutcome.skipped.
    """
