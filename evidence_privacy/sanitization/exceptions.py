class SanitizationError(Exception):
    """Base exception for all sanitization-related errors."""


class DecodeError(SanitizationError):
    """Raised when raw bytes cannot be parsed as an image of the declared type."""


class EncodeError(SanitizationError):
    """Raised when a pixel buffer cannot be serialized to the target format."""
