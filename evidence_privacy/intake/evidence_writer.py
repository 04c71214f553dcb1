import json
import secrets
from pathlib import Path

from evidence_privacy.intake.manifest_extractor import ManifestExtractor
from evidence_privacy.sanitization.models import BatchManifest, ProcessingSummary


class EvidenceWriter:
    """Persists one submission's sanitized evidence and its manifest.

    Each submission gets its own directory under *evidence_root* so that
    manifests of separate submissions never overwrite each other.
    """

    MANIFEST_NAME = "manifest.json"

    def __init__(
        self,
        evidence_root: Path,
        manifest_extractor: ManifestExtractor | None = None,
    ) -> None:
        self._evidence_root = evidence_root
        self._manifest_extractor = manifest_extractor or ManifestExtractor()

    def write(self, manifest: BatchManifest, summary: ProcessingSummary) -> list[Path]:
        """Write every sanitized file, then the manifest.

        Returns:
            Paths of the written evidence files, in manifest order.
        """
        submission_dir = self._evidence_root / f"submission_{secrets.token_hex(8)}"
        submission_dir.mkdir(parents=True)

        written: list[Path] = []
        for result in manifest:
            path = submission_dir / result.sanitized_filename
            path.write_bytes(result.sanitized_bytes)
            written.append(path)

        payload = self._manifest_extractor.extract(manifest, summary)
        manifest_path = submission_dir / self.MANIFEST_NAME
        manifest_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return written
