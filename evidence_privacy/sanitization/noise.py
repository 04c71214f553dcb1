import threading

import numpy as np


class NoiseSynthesizer:
    """Generates zero-mean uniform perturbation fields for forensic noise.

    Each value is ``(uniform(0, 1) - 0.5) * intensity * scale``, sampled
    independently per pixel and per RGB channel. There is no alpha plane, so
    transparency can never be perturbed by blending the field.

    Randomness comes either from an explicit ``numpy.random.Generator`` or
    from a child generator spawned off the instance's seed sequence. Spawned
    generators never share state, which keeps concurrent per-file
    transforms independent and makes a seeded synthesizer reproducible.
    """

    DEFAULT_SCALE = 10.0

    def __init__(self, seed: int | None = None, scale: float = DEFAULT_SCALE) -> None:
        if scale <= 0:
            raise ValueError(f"scale must be positive, got {scale}")
        self._scale = scale
        self._seed_sequence = np.random.SeedSequence(seed)
        self._lock = threading.Lock()

    @property
    def scale(self) -> float:
        return self._scale

    def spawn_generator(self) -> np.random.Generator:
        """Return a fresh generator statistically independent of all others."""
        with self._lock:
            (child,) = self._seed_sequence.spawn(1)
        return np.random.default_rng(child)

    def generate(
        self,
        width: int,
        height: int,
        intensity: float,
        rng: np.random.Generator | None = None,
    ) -> np.ndarray:
        """Build a perturbation field of shape (height, width, 3), float32.

        Raises:
            ValueError: on non-positive dimensions or negative intensity.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Dimensions must be positive, got {width}x{height}")
        if intensity < 0:
            raise ValueError(f"intensity must be non-negative, got {intensity}")
        generator = rng if rng is not None else self.spawn_generator()
        uniform = generator.random((height, width, 3), dtype=np.float32)
        return (uniform - np.float32(0.5)) * np.float32(intensity * self._scale)
