import numpy as np
import pytest

from framedsp import (
    FilterBank,
    FrequencyScale,
    InvalidArgumentError,
    StftMode,
    TriangularFilter,
    hann,
    stft,
)
from framedsp.features import hz_to_mel, mel_to_hz, power_spectrum


def test_triangular_filter_integrates_bins() -> None:
    triangle = TriangularFilter(16000, 16, 0.0, 2000.0, 4000.0)

    assert triangle.start_bin == 0
    np.testing.assert_allclose(
        triangle.coefficients, [0.25, 0.75, 0.75, 0.25], atol=1e-12, rtol=0.0
    )
    assert triangle.apply(np.ones(9)) == pytest.approx(2.0, abs=1e-12)
    assert "center=2000.000" in repr(triangle)


def test_triangular_filter_between_bins() -> None:
    triangle = TriangularFilter(16000, 16, 1500.0, 2000.0, 2500.0)

    assert triangle.start_bin == 1
    assert triangle.coefficients.shape == (2,)
    np.testing.assert_allclose(triangle.coefficients, [0.25, 0.25], atol=1e-12, rtol=0.0)
    with pytest.raises(ValueError):
        triangle.coefficients[0] = 1.0


def test_triangular_filter_rejects_unordered_edges() -> None:
    with pytest.raises(InvalidArgumentError, match="lower frequency"):
        TriangularFilter(16000, 512, 3000.0, 2000.0, 4000.0)
    with pytest.raises(InvalidArgumentError, match="upper frequency"):
        TriangularFilter(16000, 512, 1000.0, 2000.0, 1500.0)
    with pytest.raises(InvalidArgumentError, match="sample_rate"):
        TriangularFilter(0, 512, 1000.0, 2000.0, 3000.0)


def test_linear_filter_bank_edges() -> None:
    bank = FilterBank(16000, 512, 0.0, 8000.0, 10, FrequencyScale.LINEAR)
    edges = np.linspace(0.0, 8000.0, 12)

    assert bank.feature_length == 10
    assert bank.bin_count == 257
    for index, triangle in enumerate(bank.filters):
        assert triangle.lower_frequency == pytest.approx(edges[index])
        assert triangle.center_frequency == pytest.approx(edges[index + 1])
        assert triangle.upper_frequency == pytest.approx(edges[index + 2])


def test_mel_filter_bank_is_uniform_on_mel_scale() -> None:
    bank = FilterBank(16000, 512, 100.0, 7000.0, 20, "mel")
    centers = [hz_to_mel(triangle.center_frequency) for triangle in bank.filters]
    spacing = np.diff(centers)

    np.testing.assert_allclose(spacing, spacing[0], atol=1e-9, rtol=0.0)
    assert bank.filters[0].lower_frequency == pytest.approx(100.0)
    assert bank.filters[-1].upper_frequency == pytest.approx(7000.0)
    assert mel_to_hz(hz_to_mel(1234.5)) == pytest.approx(1234.5)


def test_filter_bank_transform_of_flat_spectrum() -> None:
    bank = FilterBank(16000, 512, 0.0, 8000.0, 8, FrequencyScale.MEL)
    features = bank.transform(np.ones(bank.bin_count))

    for value, triangle in zip(features, bank.filters):
        width = (triangle.upper_frequency - triangle.lower_frequency) / 16000 * 512
        assert value == pytest.approx(width / 2, rel=1e-9)

    destination = np.zeros(8)
    assert bank.transform(np.ones(bank.bin_count), destination) is destination


def test_filter_bank_transform_spectrogram() -> None:
    rng = np.random.default_rng(42)
    spectrogram, _ = stft(rng.standard_normal(4000), hann(512), 256, StftMode.ANALYSIS)
    bank = FilterBank(16000, 512, 0.0, 8000.0, 24)

    features = bank.transform_spectrogram(spectrogram)

    assert features.shape == (len(spectrogram), 24)
    np.testing.assert_allclose(
        features[3], bank.transform(power_spectrum(spectrogram[3])), atol=1e-12, rtol=0.0
    )
    assert np.all(features >= 0.0)
    assert bank.transform_spectrogram([]).shape == (0, 24)


def test_filter_bank_validation() -> None:
    bank = FilterBank(16000, 512, 0.0, 8000.0, 8)
    with pytest.raises(InvalidArgumentError, match="257 bins"):
        bank.transform(np.ones(256))
    with pytest.raises(InvalidArgumentError, match="8 elements"):
        bank.transform(np.ones(257), np.zeros(7))
    with pytest.raises(InvalidArgumentError, match="filter_count"):
        FilterBank(16000, 512, 0.0, 8000.0, 0)
    with pytest.raises(InvalidArgumentError, match="frequency scale"):
        FilterBank(16000, 512, 0.0, 8000.0, 8, "bark")
