class IntakeError(Exception):
    """Base exception for all evidence intake errors."""


class UploadValidationError(IntakeError):
    """Raised when a submission violates the upload policy."""
