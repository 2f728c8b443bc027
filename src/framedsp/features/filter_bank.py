"""Triangular filter banks over power spectra."""

from __future__ import annotations

import enum
import math
from typing import Any, Iterable

import numpy as np

from ..errors import InvalidArgumentError
from ..signal.views import as_complex_vector, as_real_vector, check_destination


class FrequencyScale(str, enum.Enum):
    """Spacing of filter edge frequencies."""

    LINEAR = "linear"
    MEL = "mel"


def hz_to_mel(frequency: float) -> float:
    return 1127.0 * math.log(1.0 + frequency / 700.0)


def mel_to_hz(mel: float) -> float:
    return 700.0 * (math.exp(mel / 1127.0) - 1.0)


def power_spectrum(spectrum: Any) -> np.ndarray:
    """Return ``|X|**2`` of a complex half-spectrum."""
    values = as_complex_vector(spectrum, name="spectrum")
    return values.real**2 + values.imag**2


def _require_positive(value: float, name: str) -> None:
    if value <= 0:
        raise InvalidArgumentError(f"{name} must be a positive value, got {value}.")


def _require_non_negative(value: float, name: str) -> None:
    if value < 0:
        raise InvalidArgumentError(f"{name} must be a non-negative value, got {value}.")


class TriangularFilter:
    """Triangle-shaped weighting of FFT bins.

    Each coefficient is the area of the triangle over one bin interval
    ``[w, w + 1)``, so filters stay accurate when their edges fall between
    bins.
    """

    def __init__(
        self,
        sample_rate: int,
        fft_length: int,
        lower_frequency: float,
        center_frequency: float,
        upper_frequency: float,
    ) -> None:
        _require_positive(sample_rate, "sample_rate")
        _require_positive(fft_length, "fft_length")
        _require_non_negative(lower_frequency, "lower_frequency")
        _require_non_negative(center_frequency, "center_frequency")
        _require_non_negative(upper_frequency, "upper_frequency")
        if lower_frequency > center_frequency:
            raise InvalidArgumentError(
                "The lower frequency must be smaller than or equal to the center frequency."
            )
        if upper_frequency < center_frequency:
            raise InvalidArgumentError(
                "The upper frequency must be greater than or equal to the center frequency."
            )

        self.sample_rate = int(sample_rate)
        self.fft_length = int(fft_length)
        self.lower_frequency = float(lower_frequency)
        self.center_frequency = float(center_frequency)
        self.upper_frequency = float(upper_frequency)

        lower_w = lower_frequency / sample_rate * fft_length
        center_w = center_frequency / sample_rate * fft_length
        upper_w = upper_frequency / sample_rate * fft_length
        start_bin = math.floor(lower_w)
        end_bin = math.ceil(upper_w)
        use_lower = center_w - lower_w > 0
        use_upper = upper_w - center_w > 0

        coefficients = np.zeros(end_bin - start_bin, dtype=np.float64)
        for i in range(coefficients.shape[0]):
            w = start_bin + i
            if use_lower and w <= int(center_w):
                x1 = max(w, lower_w)
                x2 = min(w + 1, center_w)
                y1 = (x1 - lower_w) / (center_w - lower_w)
                y2 = (x2 - lower_w) / (center_w - lower_w)
                coefficients[i] += (y1 + y2) * (x2 - x1) / 2
            if use_upper and w >= int(center_w):
                x1 = max(w, center_w)
                x2 = min(w + 1, upper_w)
                y1 = (upper_w - x1) / (upper_w - center_w)
                y2 = (upper_w - x2) / (upper_w - center_w)
                coefficients[i] += (y1 + y2) * (x2 - x1) / 2

        coefficients.flags.writeable = False
        self.start_bin = start_bin
        self.coefficients = coefficients

    def apply(self, power: np.ndarray) -> float:
        """Weighted sum of the bins of ``power`` covered by this filter."""
        end = min(self.start_bin + self.coefficients.shape[0], power.shape[0])
        size = end - self.start_bin
        if size <= 0:
            return 0.0
        return float(np.dot(self.coefficients[:size], power[self.start_bin : end]))

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(lower={self.lower_frequency:.3f}, "
            f"center={self.center_frequency:.3f}, upper={self.upper_frequency:.3f})"
        )


class FilterBank:
    """Bank of overlapping triangular filters on a linear or mel scale.

    Parameters
    ----------
    sample_rate:
        Sampling rate in Hz of the analyzed signal.
    fft_length:
        Frame length of the spectra fed to :meth:`transform`.
    min_frequency, max_frequency:
        Lower edge of the first filter and upper edge of the last one, in Hz.
    filter_count:
        Number of filters.
    scale:
        Spacing of the ``filter_count + 2`` edge frequencies.
    """

    def __init__(
        self,
        sample_rate: int,
        fft_length: int,
        min_frequency: float,
        max_frequency: float,
        filter_count: int,
        scale: FrequencyScale | str = FrequencyScale.MEL,
    ) -> None:
        _require_positive(sample_rate, "sample_rate")
        _require_positive(fft_length, "fft_length")
        _require_non_negative(min_frequency, "min_frequency")
        _require_non_negative(max_frequency, "max_frequency")
        _require_positive(filter_count, "filter_count")
        try:
            scale = FrequencyScale(scale)
        except ValueError:
            raise InvalidArgumentError(f"Unknown frequency scale: {scale!r}") from None

        if scale is FrequencyScale.LINEAR:
            edges = np.linspace(min_frequency, max_frequency, filter_count + 2)
        else:
            mels = np.linspace(hz_to_mel(min_frequency), hz_to_mel(max_frequency), filter_count + 2)
            edges = np.array([mel_to_hz(mel) for mel in mels])

        self.sample_rate = int(sample_rate)
        self.fft_length = int(fft_length)
        self.min_frequency = float(min_frequency)
        self.max_frequency = float(max_frequency)
        self.scale = scale
        self.filters = tuple(
            TriangularFilter(sample_rate, fft_length, edges[i], edges[i + 1], edges[i + 2])
            for i in range(filter_count)
        )

    @property
    def feature_length(self) -> int:
        return len(self.filters)

    @property
    def bin_count(self) -> int:
        return self.fft_length // 2 + 1

    def transform(self, power: Any, destination: np.ndarray | None = None) -> np.ndarray:
        """Apply every filter to one power spectrum of ``bin_count`` bins."""
        values = as_real_vector(power, name="power")
        if values.shape[0] != self.bin_count:
            raise InvalidArgumentError(
                f"The power spectrum must have {self.bin_count} bins, got {values.shape[0]}."
            )
        if destination is None:
            destination = np.empty(self.feature_length, dtype=np.float64)
        else:
            check_destination(destination, np.float64, name="destination")
            if destination.shape[0] != self.feature_length:
                raise InvalidArgumentError(
                    f"destination must have {self.feature_length} elements, "
                    f"got {destination.shape[0]}."
                )
        for index, triangle in enumerate(self.filters):
            destination[index] = triangle.apply(values)
        return destination

    def transform_spectrogram(self, spectrogram: Iterable[Any]) -> np.ndarray:
        """Filter-bank energies of every frame, shaped ``(n_frames, filter_count)``."""
        rows = [self.transform(power_spectrum(spectrum)) for spectrum in spectrogram]
        if not rows:
            return np.empty((0, self.feature_length), dtype=np.float64)
        return np.stack(rows)
