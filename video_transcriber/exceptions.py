"""Custom exceptions for the transcription service.

Every error carries the HTTP status it maps to; the API flattens them
into ``{"error": message}`` responses.
"""


class TranscriberError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str, detail: str | None = None):
        self.message = message
        # Captured process output, logged server-side only
        self.detail = detail
        super().__init__(message)


class ValidationError(TranscriberError):
    """Raised when the upload is missing or not an accepted video file."""

    status_code = 400


class UploadTooLargeError(ValidationError):
    """Raised when the upload exceeds the configured size limit."""

    status_code = 413


class ExtractionError(TranscriberError):
    """Raised when the audio track cannot be extracted from the video."""


class TranscriptionError(TranscriberError):
    """Raised when no transcription engine produced a transcript."""


class InternalError(TranscriberError):
    """Raised for unexpected failures inside the pipeline."""
