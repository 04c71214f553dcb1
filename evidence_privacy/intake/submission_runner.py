from pathlib import Path

from evidence_privacy.config.settings import Settings
from evidence_privacy.intake.evidence_writer import EvidenceWriter
from evidence_privacy.intake.file_loader import FileLoader
from evidence_privacy.intake.validation import UploadValidator
from evidence_privacy.logging.logger import Log
from evidence_privacy.sanitization.base import BaseMediaSanitizer
from evidence_privacy.sanitization.factory import SanitizerFactory
from evidence_privacy.sanitization.models import ProcessingOptions, ProcessingSummary
from evidence_privacy.sanitization.summary import summarize


class SubmissionRunner:
    """Runs one evidence submission end to end.

    Flow: load -> validate -> sanitize -> persist -> summarize.
    """

    def __init__(
        self,
        file_loader: FileLoader,
        validator: UploadValidator,
        sanitizer: BaseMediaSanitizer,
        writer: EvidenceWriter,
        settings: Settings,
    ) -> None:
        self._file_loader = file_loader
        self._validator = validator
        self._sanitizer = sanitizer
        self._writer = writer
        self._options = ProcessingOptions.from_settings(settings)

    def run(self, paths: list[Path]) -> ProcessingSummary:
        """Sanitize and persist the files at *paths* as one submission.

        Raises:
            FileNotFoundError: if a path does not exist.
            UploadValidationError: if the submission violates upload limits.
        """
        raws = [self._file_loader.load(path) for path in paths]
        self._validator.validate_submission(raws)
        Log.info(f"Accepted submission of {len(raws)} files")

        manifest = self._sanitizer.process_all(raws, self._options)
        summary = summarize(manifest)
        written = self._writer.write(manifest, summary)

        Log.info(
            f"Stored {len(written)} files: {summary.processing_success} processed, "
            f"{summary.metadata_stripped} metadata stripped, "
            f"{summary.noise_added} with noise, "
            f"{summary.size_reduction:.1f}% size reduction"
        )
        failed = summary.total_files - summary.processing_success
        if failed:
            Log.warning(f"{failed} files could not be sanitized and need manual review")
        return summary


def build_submission_runner(settings: Settings) -> SubmissionRunner:
    """Build a SubmissionRunner with all required adapters."""
    return SubmissionRunner(
        file_loader=FileLoader(),
        validator=UploadValidator(settings),
        sanitizer=SanitizerFactory.create(settings),
        writer=EvidenceWriter(settings.evidence_dir),
        settings=settings,
    )
