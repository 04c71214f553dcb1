from evidence_privacy.sanitization.base import BaseMediaSanitizer
from evidence_privacy.sanitization.exceptions import (
    DecodeError,
    EncodeError,
    SanitizationError,
)
from evidence_privacy.sanitization.factory import SanitizerFactory
from evidence_privacy.sanitization.models import (
    BatchManifest,
    ProcessedResult,
    ProcessingOptions,
    ProcessingSummary,
    ProcessingTag,
    RawUpload,
)
from evidence_privacy.sanitization.sanitizer import MediaSanitizer
from evidence_privacy.sanitization.summary import summarize

__all__ = [
    "BaseMediaSanitizer",
    "BatchManifest",
    "DecodeError",
    "EncodeError",
    "MediaSanitizer",
    "ProcessedResult",
    "ProcessingOptions",
    "ProcessingSummary",
    "ProcessingTag",
    "RawUpload",
    "SanitizationError",
    "SanitizerFactory",
    "summarize",
]
