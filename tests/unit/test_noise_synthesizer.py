import numpy as np
import pytest

from evidence_privacy.sanitization.noise import NoiseSynthesizer


class TestGenerateShape:
    def test_shape_is_height_width_rgb(self) -> None:
        field = NoiseSynthesizer(seed=1).generate(40, 30, 0.5)
        assert field.shape == (30, 40, 3)
        assert field.dtype == np.float32

    def test_zero_intensity_yields_zero_field(self) -> None:
        field = NoiseSynthesizer(seed=1).generate(10, 10, 0.0)
        assert not field.any()

    @pytest.mark.parametrize(("width", "height"), [(0, 10), (10, 0), (-1, 5)])
    def test_rejects_non_positive_dimensions(self, width: int, height: int) -> None:
        with pytest.raises(ValueError):
            NoiseSynthesizer().generate(width, height, 0.5)

    def test_rejects_negative_intensity(self) -> None:
        with pytest.raises(ValueError):
            NoiseSynthesizer().generate(10, 10, -0.1)

    def test_rejects_non_positive_scale(self) -> None:
        with pytest.raises(ValueError):
            NoiseSynthesizer(scale=0)


class TestDistribution:
    def test_values_bounded_by_half_range(self) -> None:
        field = NoiseSynthesizer(seed=2).generate(100, 100, 0.5)
        assert np.abs(field).max() <= 0.5 * 10 / 2

    def test_mean_is_near_zero(self) -> None:
        field = NoiseSynthesizer(seed=3).generate(200, 100, 0.5)
        assert abs(float(field.mean())) < 0.05

    def test_variance_increases_with_intensity(self) -> None:
        synthesizer = NoiseSynthesizer(seed=4)
        variances = [
            float(synthesizer.generate(100, 100, intensity).var())
            for intensity in (0.1, 0.3, 0.5, 1.0)
        ]
        assert variances == sorted(variances)
        assert len(set(variances)) == len(variances)

    def test_variance_matches_uniform_model(self) -> None:
        # Uniform over [-a/2, a/2] with a = intensity * scale has variance a^2 / 12.
        field = NoiseSynthesizer(seed=5).generate(200, 200, 0.5)
        assert float(field.var()) == pytest.approx(5.0**2 / 12, rel=0.05)

    def test_channels_are_independent(self) -> None:
        field = NoiseSynthesizer(seed=6).generate(50, 50, 1.0)
        assert not np.array_equal(field[..., 0], field[..., 1])

    def test_custom_scale(self) -> None:
        field = NoiseSynthesizer(seed=7, scale=20.0).generate(100, 100, 1.0)
        assert np.abs(field).max() <= 10.0
        assert np.abs(field).max() > 5.0


class TestRandomness:
    def test_explicit_generator_is_reproducible(self) -> None:
        synthesizer = NoiseSynthesizer()
        first = synthesizer.generate(20, 20, 0.5, rng=np.random.default_rng(42))
        second = synthesizer.generate(20, 20, 0.5, rng=np.random.default_rng(42))
        assert np.array_equal(first, second)

    def test_same_seed_same_sequence(self) -> None:
        first = NoiseSynthesizer(seed=9).generate(20, 20, 0.5)
        second = NoiseSynthesizer(seed=9).generate(20, 20, 0.5)
        assert np.array_equal(first, second)

    def test_successive_calls_differ(self) -> None:
        synthesizer = NoiseSynthesizer(seed=9)
        assert not np.array_equal(
            synthesizer.generate(20, 20, 0.5), synthesizer.generate(20, 20, 0.5)
        )

    def test_spawned_generators_are_independent(self) -> None:
        synthesizer = NoiseSynthesizer(seed=10)
        first = synthesizer.spawn_generator().random(100)
        second = synthesizer.spawn_generator().random(100)
        assert not np.array_equal(first, second)
