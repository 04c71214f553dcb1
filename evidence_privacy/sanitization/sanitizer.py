from concurrent.futures import ThreadPoolExecutor

import numpy as np

from evidence_privacy.logging.logger import Log
from evidence_privacy.sanitization.base import BaseMediaSanitizer, BaseRasterTransformer
from evidence_privacy.sanitization.exceptions import SanitizationError
from evidence_privacy.sanitization.models import (
    BatchManifest,
    ProcessedResult,
    ProcessingOptions,
    RawUpload,
)
from evidence_privacy.sanitization.noise import NoiseSynthesizer
from evidence_privacy.sanitization.passthrough import NonRasterPassthrough


class MediaSanitizer(BaseMediaSanitizer):
    """Dispatches uploads to the raster or passthrough path.

    Total by construction: every input yields exactly one result and a
    failing file only ever affects its own result. Each file gets its own
    random generator, so files share no mutable state and may run on a
    bounded thread pool.
    """

    def __init__(
        self,
        raster_transformer: BaseRasterTransformer,
        passthrough: NonRasterPassthrough,
        noise_synthesizer: NoiseSynthesizer,
        max_workers: int = 1,
    ) -> None:
        self._raster_transformer = raster_transformer
        self._passthrough = passthrough
        self._noise = noise_synthesizer
        self._max_workers = max(1, max_workers)

    def process(self, raw: RawUpload, options: ProcessingOptions) -> ProcessedResult:
        return self._process_one(raw, options, self._noise.spawn_generator())

    def process_all(
        self,
        raws: list[RawUpload],
        options: ProcessingOptions,
    ) -> BatchManifest:
        # Generators are spawned up front so results do not depend on scheduling.
        generators = [self._noise.spawn_generator() for _ in raws]
        Log.info(f"Sanitizing batch of {len(raws)} files")

        if self._max_workers == 1 or len(raws) <= 1:
            return [
                self._process_one(raw, options, rng)
                for raw, rng in zip(raws, generators)
            ]

        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(raws))) as pool:
            return list(
                pool.map(
                    lambda item: self._process_one(item[0], options, item[1]),
                    zip(raws, generators),
                )
            )

    def _process_one(
        self,
        raw: RawUpload,
        options: ProcessingOptions,
        rng: np.random.Generator,
    ) -> ProcessedResult:
        if not raw.is_supported_raster:
            Log.debug(f"Passing through unsupported type {raw.mime_type!r}")
            return self._passthrough.passthrough(raw)

        try:
            result = self._raster_transformer.transform(raw, options, rng)
        except SanitizationError as exc:
            Log.warning(f"Raster sanitization failed for {raw.mime_type!r} upload: {exc}")
            return self._passthrough.fallback(raw, exc)
        except Exception as exc:
            Log.exception(f"Unexpected error sanitizing {raw.mime_type!r} upload")
            return self._passthrough.fallback(raw, exc)

        Log.debug(
            f"Sanitized {raw.size} -> {result.processed_size} bytes "
            f"({result.width}x{result.height}): {', '.join(result.processing_applied)}"
        )
        return result
