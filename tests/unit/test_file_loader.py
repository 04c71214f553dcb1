from pathlib import Path

import pytest

from evidence_privacy.intake.file_loader import FileLoader


class TestFileLoader:
    def test_loads_bytes_and_guesses_mime(self, tmp_path: Path) -> None:
        path = tmp_path / "site.jpg"
        path.write_bytes(b"\xff\xd8\xff")

        raw = FileLoader().load(path)

        assert raw.content == b"\xff\xd8\xff"
        assert raw.declared_mime_type == "image/jpeg"
        assert raw.original_filename == "site.jpg"

    def test_unknown_extension_defaults_to_octet_stream(self, tmp_path: Path) -> None:
        path = tmp_path / "blob.zzzunknown"
        path.write_bytes(b"data")

        raw = FileLoader().load(path)

        assert raw.declared_mime_type == "application/octet-stream"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="File not found"):
            FileLoader().load(tmp_path / "nope.png")

    def test_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            FileLoader().load(tmp_path)
