from abc import ABC, abstractmethod

import numpy as np

from evidence_privacy.sanitization.models import (
    BatchManifest,
    ProcessedResult,
    ProcessingOptions,
    RawUpload,
)


class BaseRasterTransformer(ABC):
    """Contract for all raster re-encoding adapters."""

    @abstractmethod
    def transform(
        self,
        raw: RawUpload,
        options: ProcessingOptions,
        rng: np.random.Generator | None = None,
    ) -> ProcessedResult:
        """Decode, resize, perturb and re-encode a supported raster image.

        Args:
            raw: Upload whose MIME type is a supported raster type.
            options: Read-only processing options.
            rng: Random source for the noise field of this single file.

        Returns:
            ProcessedResult with metadata_stripped set.

        Raises:
            DecodeError: if the bytes are not a decodable image.
            EncodeError: if the pixel buffer cannot be serialized.
        """


class BaseMediaSanitizer(ABC):
    """Contract for all evidence sanitizers, wherever they run."""

    @abstractmethod
    def process(self, raw: RawUpload, options: ProcessingOptions) -> ProcessedResult:
        """Sanitize one upload. Never raises for bad input."""

    @abstractmethod
    def process_all(
        self,
        raws: list[RawUpload],
        options: ProcessingOptions,
    ) -> BatchManifest:
        """Sanitize a batch, returning one result per input in input order."""
