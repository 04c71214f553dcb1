from dataclasses import dataclass, field

from evidence_privacy.config.settings import Settings


class ProcessingTag:
    """Manifest tags describing which privacy transformations were applied."""

    METADATA_STRIPPED = "metadata_stripped"
    NOISE_ADDED = "noise_added"
    RESIZED = "resized"
    SAFE_FILENAME = "safe_filename"
    PROCESSING_FAILED = "processing_failed"

    ORDER: tuple[str, ...] = (
        METADATA_STRIPPED,
        NOISE_ADDED,
        RESIZED,
        SAFE_FILENAME,
        PROCESSING_FAILED,
    )


SUPPORTED_RASTER_TYPES: frozenset[str] = frozenset(
    {"image/jpeg", "image/jpg", "image/png", "image/webp", "image/gif"}
)

OUTPUT_FORMATS: dict[str, tuple[str, str]] = {
    # format -> (mime type, file extension)
    "jpeg": ("image/jpeg", "jpg"),
    "png": ("image/png", "png"),
    "webp": ("image/webp", "webp"),
}


def normalize_mime_type(mime_type: str) -> str:
    """Drop parameters and case from a MIME type: 'Image/JPEG; q=1' -> 'image/jpeg'."""
    return mime_type.split(";", 1)[0].strip().lower()


@dataclass(frozen=True)
class RawUpload:
    """A single submitted file as handed over by the upload boundary.

    original_filename is untrusted and must never reach any output.
    """

    content: bytes = field(repr=False)
    declared_mime_type: str
    original_filename: str = field(repr=False)

    @property
    def mime_type(self) -> str:
        return normalize_mime_type(self.declared_mime_type)

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def is_supported_raster(self) -> bool:
        return self.mime_type in SUPPORTED_RASTER_TYPES


@dataclass(frozen=True)
class ProcessingOptions:
    """Read-only configuration for one pipeline invocation."""

    max_width: int = 1920
    max_height: int = 1080
    # 0-1 or 0-100. Values <= 1 use the 0-1 scale, so 1 means full quality.
    quality: float = 0.85
    add_noise: bool = True
    noise_intensity: float = 0.3
    strip_metadata: bool = True
    output_format: str = "jpeg"

    def __post_init__(self) -> None:
        if self.max_width <= 0 or self.max_height <= 0:
            raise ValueError(
                f"max_width and max_height must be positive, "
                f"got {self.max_width}x{self.max_height}"
            )
        if not 0 < self.quality <= 100:
            raise ValueError(f"quality must be in (0, 100], got {self.quality}")
        if self.noise_intensity < 0:
            raise ValueError(
                f"noise_intensity must be non-negative, got {self.noise_intensity}"
            )
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format '{self.output_format}'. "
                f"Choose from: {list(OUTPUT_FORMATS)}"
            )

    @property
    def encoder_quality(self) -> int:
        """Quality on Pillow's 1-100 scale, accepting either convention."""
        scaled = self.quality * 100 if self.quality <= 1 else self.quality
        return max(1, min(100, int(round(scaled))))

    @property
    def output_mime_type(self) -> str:
        return OUTPUT_FORMATS[self.output_format][0]

    @property
    def output_extension(self) -> str:
        return OUTPUT_FORMATS[self.output_format][1]

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProcessingOptions":
        return cls(
            max_width=settings.image_max_width,
            max_height=settings.image_max_height,
            quality=settings.image_quality,
            add_noise=settings.noise_enabled,
            noise_intensity=settings.noise_intensity,
            strip_metadata=settings.strip_metadata,
            output_format=settings.output_format.lower(),
        )


@dataclass(frozen=True)
class ProcessedResult:
    """Output of the pipeline for one input file. Immutable once built."""

    sanitized_bytes: bytes = field(repr=False)
    sanitized_filename: str
    mime_type: str
    width: int
    height: int
    original_size: int
    processed_size: int
    metadata_stripped: bool
    noise_added: bool
    processing_applied: tuple[str, ...]
    error_message: str = ""

    @property
    def failed(self) -> bool:
        return ProcessingTag.PROCESSING_FAILED in self.processing_applied


BatchManifest = list[ProcessedResult]


@dataclass(frozen=True)
class ProcessingSummary:
    """Aggregate counts over a BatchManifest for caller display."""

    total_files: int = 0
    metadata_stripped: int = 0
    noise_added: int = 0
    size_reduction: float = 0.0  # percent
    processing_success: int = 0


def ordered_tags(tags: set[str]) -> tuple[str, ...]:
    """Return *tags* in canonical manifest order."""
    return tuple(tag for tag in ProcessingTag.ORDER if tag in tags)
