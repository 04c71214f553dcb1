from evidence_privacy.config.settings import Settings
from evidence_privacy.sanitization.base import BaseMediaSanitizer
from evidence_privacy.sanitization.identifiers import IdentifierScrubber
from evidence_privacy.sanitization.noise import NoiseSynthesizer
from evidence_privacy.sanitization.passthrough import NonRasterPassthrough
from evidence_privacy.sanitization.raster import PillowRasterTransformer
from evidence_privacy.sanitization.sanitizer import MediaSanitizer


class SanitizerFactory:
    """Creates the configured media sanitizer."""

    @classmethod
    def create(cls, settings: Settings) -> BaseMediaSanitizer:
        scrubber = IdentifierScrubber()
        noise = NoiseSynthesizer(seed=settings.noise_seed, scale=settings.noise_scale)
        return MediaSanitizer(
            raster_transformer=PillowRasterTransformer(scrubber, noise),
            passthrough=NonRasterPassthrough(scrubber),
            noise_synthesizer=noise,
            max_workers=settings.batch_workers,
        )
