from dataclasses import asdict

from evidence_privacy.sanitization.models import (
    BatchManifest,
    ProcessedResult,
    ProcessingSummary,
)


class ManifestExtractor:
    """Converts a batch manifest to a JSON-serializable audit structure."""

    def extract(
        self,
        manifest: BatchManifest,
        summary: ProcessingSummary,
    ) -> dict[str, object]:
        """Returns:
            Dict with 'files' (one entry per result, no payload bytes) and
            'summary' keys.
        """
        return {
            "files": [self._result_to_dict(result) for result in manifest],
            "summary": asdict(summary),
        }

    def _result_to_dict(self, result: ProcessedResult) -> dict[str, object]:
        return {
            "filename": result.sanitized_filename,
            "mime_type": result.mime_type,
            "width": result.width,
            "height": result.height,
            "original_size": result.original_size,
            "processed_size": result.processed_size,
            "metadata_stripped": result.metadata_stripped,
            "noise_added": result.noise_added,
            "processing_applied": list(result.processing_applied),
            "error": result.error_message or None,
        }
