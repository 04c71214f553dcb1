from evidence_privacy.config.settings import Settings
from evidence_privacy.intake.exceptions import UploadValidationError
from evidence_privacy.sanitization.models import RawUpload


class UploadValidator:
    """Enforces per-submission upload limits before sanitization runs."""

    MIME_EXTENSIONS: dict[str, tuple[str, ...]] = {
        "image/jpeg": ("jpg", "jpeg"),
        "image/png": ("png",),
        "image/gif": ("gif",),
        "image/webp": ("webp",),
        "video/mp4": ("mp4",),
        "video/webm": ("webm",),
    }

    def __init__(self, settings: Settings) -> None:
        self._max_files = settings.max_files_per_submission
        self._max_size = settings.max_file_size_bytes
        self._allowed_types = {mime.lower() for mime in settings.allowed_mime_types}

    def validate_submission(self, raws: list[RawUpload]) -> None:
        """Raises:
            UploadValidationError: on the first violated limit.
        """
        if not raws:
            raise UploadValidationError("No files provided")
        if len(raws) > self._max_files:
            raise UploadValidationError(
                f"Too many files: {len(raws)} (limit {self._max_files})"
            )
        for position, raw in enumerate(raws, start=1):
            try:
                self.validate(raw)
            except UploadValidationError as exc:
                raise UploadValidationError(f"File {position}: {exc}") from exc

    def validate(self, raw: RawUpload) -> None:
        if raw.size > self._max_size:
            raise UploadValidationError(
                f"File size {raw.size} exceeds {self._max_size} byte limit"
            )
        if raw.mime_type not in self._allowed_types:
            raise UploadValidationError(f"File type {raw.mime_type!r} not allowed")

        _, dot, extension = raw.original_filename.rpartition(".")
        allowed_extensions = self.MIME_EXTENSIONS.get(raw.mime_type, ())
        if dot and allowed_extensions and extension.lower() not in allowed_extensions:
            raise UploadValidationError("File extension does not match file type")
