"""Server-side raster sanitization with Pillow and numpy.

Processing flow:
1. Decode the upload (first frame only) and apply EXIF orientation.
2. Copy the pixels into a bare RGB/RGBA array. Nothing but pixels survives
   this step: EXIF, GPS, XMP, ICC profiles, comments and text chunks stay
   behind in the discarded source image.
3. Resample into the bounding box computed by compute_target_dimensions.
4. Blend the noise field into the RGB channels.
5. Encode a fresh image built from the array and scrub the filename.
"""

import io

import numpy as np
from PIL import Image, ImageOps

from evidence_privacy.logging.logger import Log
from evidence_privacy.sanitization.base import BaseRasterTransformer
from evidence_privacy.sanitization.dimensions import compute_target_dimensions
from evidence_privacy.sanitization.exceptions import DecodeError, EncodeError
from evidence_privacy.sanitization.identifiers import IdentifierScrubber
from evidence_privacy.sanitization.models import (
    ProcessedResult,
    ProcessingOptions,
    ProcessingTag,
    RawUpload,
    ordered_tags,
)
from evidence_privacy.sanitization.noise import NoiseSynthesizer


class PillowRasterTransformer(BaseRasterTransformer):
    """Re-encodes JPEG, PNG, WEBP and GIF evidence from raw pixels."""

    # Multi-picture phone JPEGs (MPO) open through the JPEG entry.
    DECODABLE_FORMATS: tuple[str, ...] = ("JPEG", "PNG", "WEBP", "GIF")
    DECODE_ERRORS: tuple[type[Exception], ...] = (
        OSError,
        ValueError,
        SyntaxError,
        Image.DecompressionBombError,
    )

    def __init__(
        self,
        scrubber: IdentifierScrubber,
        noise_synthesizer: NoiseSynthesizer,
    ) -> None:
        self._scrubber = scrubber
        self._noise = noise_synthesizer

    def transform(
        self,
        raw: RawUpload,
        options: ProcessingOptions,
        rng: np.random.Generator | None = None,
    ) -> ProcessedResult:
        pixels = self._decode(raw.content)
        source_height, source_width = pixels.shape[:2]
        width, height = compute_target_dimensions(
            source_width, source_height, options.max_width, options.max_height
        )

        tags = {ProcessingTag.SAFE_FILENAME}
        if options.strip_metadata:
            tags.add(ProcessingTag.METADATA_STRIPPED)

        pixels = self._resample(pixels, width, height)
        if (width, height) != (source_width, source_height):
            tags.add(ProcessingTag.RESIZED)

        noise_added = False
        if options.add_noise and options.noise_intensity > 0:
            field = self._noise.generate(width, height, options.noise_intensity, rng)
            pixels = self._blend(pixels, field)
            noise_added = True
            tags.add(ProcessingTag.NOISE_ADDED)

        encoded = self._encode(pixels, options)
        filename = self._scrubber.scrub(raw.original_filename, options.output_extension)

        return ProcessedResult(
            sanitized_bytes=encoded,
            sanitized_filename=filename,
            mime_type=options.output_mime_type,
            width=width,
            height=height,
            original_size=raw.size,
            processed_size=len(encoded),
            metadata_stripped=True,
            noise_added=noise_added,
            processing_applied=ordered_tags(tags),
        )

    def _decode(self, content: bytes) -> np.ndarray:
        try:
            with Image.open(io.BytesIO(content), formats=self.DECODABLE_FORMATS) as image:
                image.seek(0)
                image.load()
                oriented = self._apply_orientation(image)
                mode = "RGBA" if self._has_alpha(oriented) else "RGB"
                return np.array(oriented.convert(mode), dtype=np.uint8)
        except self.DECODE_ERRORS as exc:
            raise DecodeError(f"Image decoding failed: {exc}") from exc

    @staticmethod
    def _apply_orientation(image: Image.Image) -> Image.Image:
        # Best effort: unreadable EXIF must not fail an otherwise decodable image.
        try:
            return ImageOps.exif_transpose(image)
        except Exception as exc:
            Log.warning(f"Ignoring unreadable EXIF orientation: {exc}")
            return image

    @staticmethod
    def _has_alpha(image: Image.Image) -> bool:
        return "A" in image.getbands() or "transparency" in image.info

    @staticmethod
    def _resample(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
        image = Image.fromarray(pixels)
        if image.size != (width, height):
            image = image.resize((width, height), Image.Resampling.BICUBIC)
        return np.array(image, dtype=np.uint8)

    @staticmethod
    def _blend(pixels: np.ndarray, field: np.ndarray) -> np.ndarray:
        """Additive blend on RGB, clipped to the channel range. Alpha is untouched."""
        blended = pixels.astype(np.float32)
        blended[..., :3] += field
        np.clip(blended, 0, 255, out=blended)
        return np.rint(blended).astype(np.uint8)

    @staticmethod
    def _encode(pixels: np.ndarray, options: ProcessingOptions) -> bytes:
        buffer = io.BytesIO()
        try:
            image = Image.fromarray(pixels)
            if options.output_format == "jpeg":
                if image.mode == "RGBA":
                    # JPEG has no alpha; transparent areas become black.
                    flattened = Image.new("RGB", image.size, (0, 0, 0))
                    flattened.paste(image, mask=image.getchannel("A"))
                    image = flattened
                image.save(
                    buffer,
                    format="JPEG",
                    quality=options.encoder_quality,
                    progressive=False,
                    optimize=False,
                )
            elif options.output_format == "png":
                image.save(buffer, format="PNG", compress_level=6)
            else:
                image.save(
                    buffer, format="WEBP", quality=options.encoder_quality, method=4
                )
        except Exception as exc:
            raise EncodeError(f"Image encoding failed: {exc}") from exc

        encoded = buffer.getvalue()
        if not encoded:
            raise EncodeError("Image encoder produced no data")
        return encoded
