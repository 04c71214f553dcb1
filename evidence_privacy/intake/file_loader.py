import mimetypes
from pathlib import Path

from evidence_privacy.sanitization.models import RawUpload


class FileLoader:
    """Reads an evidence file from disk into a RawUpload."""

    DEFAULT_MIME_TYPE = "application/octet-stream"

    def load(self, path: Path) -> RawUpload:
        """Read file bytes and guess the declared MIME type from the name.

        Raises:
            FileNotFoundError: if the file does not exist.
        """
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        mime_type, _ = mimetypes.guess_type(path.name, strict=False)
        return RawUpload(
            content=path.read_bytes(),
            declared_mime_type=mime_type or self.DEFAULT_MIME_TYPE,
            original_filename=path.name,
        )
