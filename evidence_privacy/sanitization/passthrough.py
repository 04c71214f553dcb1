import mimetypes

from evidence_privacy.sanitization.identifiers import IdentifierScrubber
from evidence_privacy.sanitization.models import (
    ProcessedResult,
    ProcessingTag,
    RawUpload,
    ordered_tags,
)


class NonRasterPassthrough:
    """Renames files the raster path cannot or did not sanitize.

    Bytes pass through unchanged, so the result never claims that metadata
    was stripped or noise was added.
    """

    FALLBACK_EXTENSION = "bin"

    _KNOWN_EXTENSIONS: dict[str, str] = {
        "image/jpeg": "jpg",
        "image/jpg": "jpg",
        "image/png": "png",
        "image/webp": "webp",
        "image/gif": "gif",
        "video/mp4": "mp4",
        "video/webm": "webm",
        "video/quicktime": "mov",
        "application/pdf": "pdf",
    }

    def __init__(self, scrubber: IdentifierScrubber) -> None:
        self._scrubber = scrubber

    def passthrough(self, raw: RawUpload) -> ProcessedResult:
        return self._build(raw, {ProcessingTag.SAFE_FILENAME})

    def fallback(self, raw: RawUpload, error: Exception) -> ProcessedResult:
        """Result for a raster upload whose transform failed."""
        return self._build(
            raw,
            {ProcessingTag.SAFE_FILENAME, ProcessingTag.PROCESSING_FAILED},
            error_message=str(error),
        )

    def extension_for(self, mime_type: str) -> str:
        """File extension derived from the MIME type alone, never the filename."""
        known = self._KNOWN_EXTENSIONS.get(mime_type)
        if known is not None:
            return known
        guessed = mimetypes.guess_extension(mime_type, strict=False)
        return guessed.lstrip(".") if guessed else self.FALLBACK_EXTENSION

    def _build(
        self,
        raw: RawUpload,
        tags: set[str],
        error_message: str = "",
    ) -> ProcessedResult:
        filename = self._scrubber.scrub(
            raw.original_filename, self.extension_for(raw.mime_type)
        )
        return ProcessedResult(
            sanitized_bytes=raw.content,
            sanitized_filename=filename,
            mime_type=raw.mime_type or "application/octet-stream",
            width=0,
            height=0,
            original_size=raw.size,
            processed_size=raw.size,
            metadata_stripped=False,
            noise_added=False,
            processing_applied=ordered_tags(tags),
            error_message=error_message,
        )
